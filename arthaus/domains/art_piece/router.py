from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from arthaus.core.errors import ValidationError
from arthaus.domains.art_piece import schemas
from arthaus.domains.art_piece.service import ArtPieceService
from arthaus.domains.art_piece.sorting import DEFAULT_SORT_OPTION, SortOption
from arthaus.shared.database.connection import get_db

router = APIRouter(prefix="/art-pieces", tags=["art_piece"])


@router.get("/sort-options", response_model=List[schemas.SortOptionResponse])
def list_sort_options():
    """Sort options with display labels, default first"""
    return [{"value": option, "label": option.label} for option in SortOption]


@router.get("/{piece_id}", response_model=schemas.ArtPieceResponse)
def get_art_piece(
    piece_id: int,
    db: Session = Depends(get_db),
):
    service = ArtPieceService(db)
    return service.get_art_piece(piece_id)


@router.patch("/{piece_id}", response_model=schemas.ArtPieceResponse)
def update_art_piece(
    piece_id: int,
    payload: schemas.ArtPieceUpdate,
    db: Session = Depends(get_db),
):
    """
    Partially update an art piece

    Switching a piece to `tracking` clears its acquisition date.

    **Possible errors:**
    - 404: Art piece (or target gallery) not found
    - 422: Invalid field values
    """
    service = ArtPieceService(db)
    return service.update_art_piece(piece_id, payload)


@router.delete("/{piece_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_art_piece(
    piece_id: int,
    db: Session = Depends(get_db),
):
    service = ArtPieceService(db)
    service.remove_art_piece(piece_id)
    return None


@router.get("/{piece_id}/position", response_model=schemas.ViewPositionResponse)
def locate_art_piece(
    piece_id: int,
    sort: SortOption = Query(DEFAULT_SORT_OPTION),
    db: Session = Depends(get_db),
):
    """Index and neighbours of a piece among its same-type siblings"""
    service = ArtPieceService(db)
    return service.locate(piece_id, sort)


@router.get("/{piece_id}/image")
def get_art_piece_image(
    piece_id: int,
    db: Session = Depends(get_db),
):
    service = ArtPieceService(db)
    return Response(content=service.get_image(piece_id), media_type="application/octet-stream")


async def _read_image_body(request: Request, max_bytes: int) -> bytes:
    """Read the upload, stopping as soon as it exceeds `max_bytes`"""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > max_bytes:
        raise ValidationError(
            f"image payload exceeds {max_bytes} bytes",
            field="image",
            size=int(declared),
        )
    data = bytearray()
    async for chunk in request.stream():
        data.extend(chunk)
        if len(data) > max_bytes:
            raise ValidationError(f"image payload exceeds {max_bytes} bytes", field="image")
    return bytes(data)


@router.put("/{piece_id}/image", response_model=schemas.ArtPieceResponse)
async def upload_art_piece_image(
    piece_id: int,
    request: Request,
    db: Session = Depends(get_db),
):
    """Store the raw request body as the piece's image"""
    service = ArtPieceService(db)
    data = await _read_image_body(request, service.max_image_bytes)
    # DB work and write_lock stay off the event loop
    return await run_in_threadpool(service.set_image, piece_id, data)


@router.delete("/{piece_id}/image", response_model=schemas.ArtPieceResponse)
def delete_art_piece_image(
    piece_id: int,
    db: Session = Depends(get_db),
):
    service = ArtPieceService(db)
    return service.set_image(piece_id, None)
