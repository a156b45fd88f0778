from datetime import datetime

from pydantic import BaseModel, Field


class GalleryCreate(BaseModel):
    title: str = Field(..., max_length=200, description="Gallery title")


class GalleryUpdate(BaseModel):
    title: str = Field(..., max_length=200, description="New gallery title")


class GalleryResponse(BaseModel):
    id: int
    title: str
    created_at: datetime
    collected_count: int = Field(..., description="Number of collection pieces")
    tracked_count: int = Field(..., description="Number of tracking pieces")

    class Config:
        from_attributes = True
