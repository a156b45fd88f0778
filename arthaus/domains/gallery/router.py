from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from arthaus.domains.art_piece import schemas as art_piece_schemas
from arthaus.domains.art_piece.models import ArtPieceType
from arthaus.domains.art_piece.service import ArtPieceService
from arthaus.domains.art_piece.sorting import DEFAULT_SORT_OPTION, SortOption
from arthaus.domains.gallery import schemas
from arthaus.domains.gallery.service import GalleryService
from arthaus.shared.database.connection import get_db

router = APIRouter(prefix="/galleries", tags=["gallery"])


@router.get("/", response_model=List[schemas.GalleryResponse])
def list_galleries(
    db: Session = Depends(get_db),
):
    service = GalleryService(db)
    return service.list_galleries()


@router.post("/", response_model=schemas.GalleryResponse, status_code=status.HTTP_201_CREATED)
def create_gallery(
    payload: schemas.GalleryCreate,
    db: Session = Depends(get_db),
):
    """
    Create an empty gallery

    **Possible errors:**
    - 422: Title is empty
    """
    service = GalleryService(db)
    return service.create_gallery(payload.title)


@router.get("/{gallery_id}", response_model=schemas.GalleryResponse)
def get_gallery(
    gallery_id: int,
    db: Session = Depends(get_db),
):
    service = GalleryService(db)
    return service.get_gallery(gallery_id)


@router.put("/{gallery_id}", response_model=schemas.GalleryResponse)
def rename_gallery(
    gallery_id: int,
    payload: schemas.GalleryUpdate,
    db: Session = Depends(get_db),
):
    """
    Rename a gallery

    **Possible errors:**
    - 404: Gallery not found
    - 422: Title is empty
    """
    service = GalleryService(db)
    return service.rename_gallery(gallery_id, payload.title)


@router.delete("/{gallery_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_gallery(
    gallery_id: int,
    db: Session = Depends(get_db),
):
    """
    Delete a gallery together with all of its art pieces

    **Possible errors:**
    - 404: Gallery not found
    """
    service = GalleryService(db)
    service.delete_gallery(gallery_id)
    return None


@router.post(
    "/{gallery_id}/art-pieces",
    response_model=art_piece_schemas.ArtPieceResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_art_piece(
    gallery_id: int,
    payload: art_piece_schemas.ArtPieceCreate,
    db: Session = Depends(get_db),
):
    """
    Add an art piece at the end of the gallery

    **Possible errors:**
    - 404: Gallery not found
    - 422: Empty title, negative price, or a date on a tracking piece (strict mode)
    """
    service = ArtPieceService(db)
    return service.add_art_piece(gallery_id, payload)


@router.get("/{gallery_id}/art-pieces", response_model=List[art_piece_schemas.ArtPieceResponse])
def view_art_pieces(
    gallery_id: int,
    piece_type: ArtPieceType = Query(ArtPieceType.COLLECTION, alias="type"),
    sort: SortOption = Query(DEFAULT_SORT_OPTION),
    db: Session = Depends(get_db),
):
    """Pieces of one type in a gallery, in the requested order"""
    service = ArtPieceService(db)
    return service.view_gallery(gallery_id, piece_type, sort)
