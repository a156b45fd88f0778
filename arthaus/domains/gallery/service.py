import logging
from typing import List

from sqlalchemy.orm import Session

from arthaus.core.errors import NotFoundError
from arthaus.domains.gallery import models
from arthaus.shared.database.connection import write_lock
from arthaus.shared.utils.validation import require_title

logger = logging.getLogger(__name__)


class GalleryService:
    def __init__(self, db: Session):
        self.db = db

    def create_gallery(self, title: str) -> models.Gallery:
        """Create an empty gallery"""
        require_title(title)
        with write_lock:
            gallery = models.Gallery(title=title)
            self.db.add(gallery)
            self.db.commit()
            self.db.refresh(gallery)
        logger.info("Created gallery %s (%r)", gallery.id, gallery.title)
        return gallery

    def get_gallery(self, gallery_id: int) -> models.Gallery:
        gallery = (
            self.db.query(models.Gallery)
            .filter(models.Gallery.id == gallery_id)
            .first()
        )
        if not gallery:
            raise NotFoundError("Gallery", gallery_id)
        return gallery

    def list_galleries(self) -> List[models.Gallery]:
        """All galleries in creation order"""
        return (
            self.db.query(models.Gallery)
            .order_by(models.Gallery.id.asc())
            .all()
        )

    def rename_gallery(self, gallery_id: int, new_title: str) -> models.Gallery:
        with write_lock:
            gallery = self.get_gallery(gallery_id)
            require_title(new_title)
            gallery.title = new_title
            self.db.add(gallery)
            self.db.commit()
            self.db.refresh(gallery)
        logger.info("Renamed gallery %s to %r", gallery_id, new_title)
        return gallery

    def delete_gallery(self, gallery_id: int) -> None:
        """Delete a gallery and every art piece it owns"""
        with write_lock:
            gallery = self.get_gallery(gallery_id)
            piece_count = len(gallery.art_pieces)
            self.db.delete(gallery)
            self.db.commit()
        logger.info("Deleted gallery %s with %d art pieces", gallery_id, piece_count)
