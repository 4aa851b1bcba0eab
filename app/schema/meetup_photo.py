"""
Meetup photo schemas.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class MeetupPhotoCreate(BaseModel):
    postcard_id: int = Field(..., gt=0)
    photo_url: str = Field(..., min_length=1)
    caption: Optional[str] = None


class MeetupPhotoRead(BaseModel):
    id: int
    postcard_id: int
    photo_url: str
    caption: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    class Config:
        from_attributes = True
