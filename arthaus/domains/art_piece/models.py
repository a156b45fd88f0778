import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Enum, Float, ForeignKey, Integer, LargeBinary, String
from sqlalchemy.orm import relationship

from arthaus.shared.database.connection import Base


class ArtPieceType(str, enum.Enum):
    COLLECTION = "collection"  # owned
    TRACKING = "tracking"  # watched, not acquired


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ArtPiece(Base):
    __tablename__ = "art_pieces"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    gallery_id = Column(
        Integer,
        ForeignKey("galleries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)  # insertion rank within gallery
    type = Column(
        Enum(ArtPieceType, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    title = Column(String(255), nullable=False)
    artist = Column(String(255), nullable=False, default="")
    gallery_name = Column(String(255), nullable=False, default="")  # free-text source
    price = Column(Float, nullable=False, default=0.0)
    date_acquired = Column(Date, nullable=True)
    image_data = Column(LargeBinary, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # Lookup only; lifecycle is owned by Gallery.art_pieces
    gallery = relationship("Gallery", back_populates="art_pieces")

    @property
    def has_image(self) -> bool:
        return self.image_data is not None
