"""
User schemas.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from app.utils.identity import Platform, avatar_url


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    handle: str = Field(..., min_length=1)
    platform: Platform


class UserRead(BaseModel):
    id: int
    name: str
    handle: str
    platform: str
    slug: str
    external_id: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def _derive_avatar(self) -> "UserRead":
        if self.avatar_url is None:
            self.avatar_url = avatar_url(self.platform, self.handle)
        return self
