import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from arthaus.core.config import settings
from arthaus.core.errors import NotFoundError, ValidationError
from arthaus.domains.art_piece import schemas
from arthaus.domains.art_piece.models import ArtPiece, ArtPieceType
from arthaus.domains.art_piece.sorting import SortOption, ViewPosition, locate_in_view, view_pieces
from arthaus.domains.gallery.models import Gallery
from arthaus.domains.gallery.service import GalleryService
from arthaus.shared.database.connection import write_lock
from arthaus.shared.utils.validation import require_image, require_price, require_title

logger = logging.getLogger(__name__)

# Patch fields that may be omitted but never set to null
_NON_NULLABLE = ("type", "title", "artist", "gallery_name", "price", "gallery_id")


class ArtPieceService:
    def __init__(
        self,
        db: Session,
        reject_tracking_dates: Optional[bool] = None,
        max_image_bytes: Optional[int] = None,
    ):
        self.db = db
        self.galleries = GalleryService(db)
        self.reject_tracking_dates = (
            settings.reject_tracking_dates if reject_tracking_dates is None else reject_tracking_dates
        )
        self.max_image_bytes = settings.max_image_bytes if max_image_bytes is None else max_image_bytes

    def _resolve_date(self, piece_type: ArtPieceType, supplied: Optional[date]) -> Optional[date]:
        """Tracking pieces are not acquired yet, so they never keep a date."""
        if piece_type != ArtPieceType.TRACKING:
            return supplied
        if supplied is not None and self.reject_tracking_dates:
            raise ValidationError(
                "tracking pieces cannot have an acquisition date",
                field="date_acquired",
            )
        return None

    def _next_position(self, gallery: Gallery) -> int:
        """Next insertion rank, read from the database; call under write_lock."""
        return self.db.execute(
            select(func.coalesce(func.max(ArtPiece.position), -1) + 1)
            .where(ArtPiece.gallery_id == gallery.id)
        ).scalar_one()

    def get_art_piece(self, piece_id: int) -> ArtPiece:
        piece = (
            self.db.query(ArtPiece)
            .filter(ArtPiece.id == piece_id)
            .first()
        )
        if not piece:
            raise NotFoundError("Art piece", piece_id)
        return piece

    def add_art_piece(self, gallery_id: int, payload: schemas.ArtPieceCreate) -> ArtPiece:
        """Append a new art piece to the end of a gallery"""
        with write_lock:
            gallery = self.galleries.get_gallery(gallery_id)
            title = require_title(payload.title)
            price = require_price(payload.price)
            date_acquired = self._resolve_date(payload.type, payload.date_acquired)
            image_data = None
            if payload.image is not None:
                image_data = require_image(payload.image, self.max_image_bytes)

            piece = ArtPiece(
                type=payload.type,
                title=title,
                artist=payload.artist,
                gallery_name=payload.gallery_name,
                price=price,
                date_acquired=date_acquired,
                image_data=image_data,
                position=self._next_position(gallery),
            )
            gallery.art_pieces.append(piece)
            self.db.commit()
            self.db.refresh(piece)
        logger.info("Added %s piece %s to gallery %s", piece.type.value, piece.id, gallery_id)
        return piece

    def update_art_piece(self, piece_id: int, payload: schemas.ArtPieceUpdate) -> ArtPiece:
        """Apply a partial update; the whole patch is validated before anything changes"""
        changes = payload.model_dump(exclude_unset=True)
        for field in _NON_NULLABLE:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be null", field=field)

        with write_lock:
            piece = self.get_art_piece(piece_id)

            if "title" in changes:
                require_title(changes["title"])
            if "price" in changes:
                changes["price"] = require_price(changes["price"])

            piece_type = changes.get("type", piece.type)
            if "date_acquired" in changes:
                changes["date_acquired"] = self._resolve_date(piece_type, changes["date_acquired"])
            elif piece_type == ArtPieceType.TRACKING:
                # Switching to tracking drops any existing date
                changes["date_acquired"] = None

            if "image" in changes:
                image = changes.pop("image")
                changes["image_data"] = (
                    None if image is None else require_image(image, self.max_image_bytes)
                )

            target = None
            target_id = changes.pop("gallery_id", piece.gallery_id)
            if target_id != piece.gallery_id:
                target = self.galleries.get_gallery(target_id)

            for field, value in changes.items():
                setattr(piece, field, value)
            if target is not None:
                piece.position = self._next_position(target)
                piece.gallery = target

            self.db.add(piece)
            self.db.commit()
            self.db.refresh(piece)
        logger.info("Updated art piece %s", piece_id)
        return piece

    def remove_art_piece(self, piece_id: int) -> None:
        with write_lock:
            piece = self.get_art_piece(piece_id)
            self.db.delete(piece)
            self.db.commit()
        logger.info("Removed art piece %s", piece_id)

    def set_image(self, piece_id: int, data: Optional[bytes]) -> ArtPiece:
        """Replace the image payload, or drop it when `data` is None"""
        if data is not None:
            require_image(data, self.max_image_bytes)
        with write_lock:
            piece = self.get_art_piece(piece_id)
            piece.image_data = data
            self.db.add(piece)
            self.db.commit()
            self.db.refresh(piece)
        logger.info("%s image of art piece %s", "Stored" if data is not None else "Cleared", piece_id)
        return piece

    def get_image(self, piece_id: int) -> bytes:
        piece = self.get_art_piece(piece_id)
        if piece.image_data is None:
            raise NotFoundError("Image of art piece", piece_id)
        return piece.image_data

    def view_gallery(
        self,
        gallery_id: int,
        piece_type: ArtPieceType,
        sort_option: SortOption,
    ) -> List[ArtPiece]:
        """Pieces of one type in a gallery, sorted"""
        gallery = self.galleries.get_gallery(gallery_id)
        return view_pieces(gallery, piece_type, sort_option)

    def locate(self, piece_id: int, sort_option: SortOption) -> ViewPosition:
        """Position of a piece among its same-type siblings, for paging in a viewer"""
        return locate_in_view(self.get_art_piece(piece_id), sort_option)
