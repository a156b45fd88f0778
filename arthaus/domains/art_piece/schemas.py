from datetime import date, datetime
from typing import Optional

from pydantic import Base64Bytes, BaseModel, Field

from arthaus.domains.art_piece.models import ArtPieceType
from arthaus.domains.art_piece.sorting import SortOption


class ArtPieceCreate(BaseModel):
    """Art piece creation request schema"""
    type: ArtPieceType = Field(ArtPieceType.COLLECTION, description="collection (owned) or tracking (watched)")
    title: str = Field(..., description="Art piece title")
    artist: str = Field("", description="Artist name")
    gallery_name: str = Field("", description="Where the piece comes from (free text)")
    price: float = Field(0.0, description="Price, currency-agnostic")
    date_acquired: Optional[date] = Field(None, description="Acquisition date (collection pieces only)")
    image: Optional[Base64Bytes] = Field(None, description="Base64-encoded image payload")


class ArtPieceUpdate(BaseModel):
    """Partial art piece update; only fields that are sent change"""
    type: Optional[ArtPieceType] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    gallery_name: Optional[str] = None
    price: Optional[float] = None
    date_acquired: Optional[date] = None
    image: Optional[Base64Bytes] = Field(None, description="Base64-encoded image; null removes it")
    gallery_id: Optional[int] = Field(None, description="Move the piece to another gallery")


class ArtPieceResponse(BaseModel):
    id: int
    gallery_id: int
    type: ArtPieceType
    title: str
    artist: str
    gallery_name: str
    price: float
    date_acquired: Optional[date]
    has_image: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ViewPositionResponse(BaseModel):
    piece_id: int
    index: int
    total: int
    previous_id: Optional[int]
    next_id: Optional[int]

    class Config:
        from_attributes = True


class SortOptionResponse(BaseModel):
    value: SortOption
    label: str
