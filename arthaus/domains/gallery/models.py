from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from arthaus.domains.art_piece.models import ArtPiece, ArtPieceType
from arthaus.shared.database.connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Gallery(Base):
    """A named collection of art pieces (a "Haus")."""

    __tablename__ = "galleries"
    __table_args__ = {"sqlite_autoincrement": True}  # ids are never reused

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # Gallery owns its pieces; insertion order via ArtPiece.position, id breaks ties
    art_pieces = relationship(
        "ArtPiece",
        back_populates="gallery",
        order_by=[ArtPiece.position, ArtPiece.id],
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def count_by_type(self, piece_type: ArtPieceType) -> int:
        return sum(1 for piece in self.art_pieces if piece.type == piece_type)

    @property
    def collected_count(self) -> int:
        return self.count_by_type(ArtPieceType.COLLECTION)

    @property
    def tracked_count(self) -> int:
        return self.count_by_type(ArtPieceType.TRACKING)
