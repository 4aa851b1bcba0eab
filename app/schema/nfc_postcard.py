"""
NFC postcard schemas.

Joined reads only carry `sender` / `recipient` when the foreign key is set;
routes serialize with exclude_unset so absent relations are dropped, not nulled.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schema.template import TemplateRead
from app.schema.user import UserRead


class NFCPostcardCreate(BaseModel):
    """Body for POST /nfc-postcards."""
    sender_id: Optional[int] = Field(None, gt=0)
    recipient_id: Optional[int] = Field(None, gt=0)
    template_id: int = Field(..., gt=0)
    message: Optional[str] = None
    custom_image_url: Optional[str] = None


class NFCPostcardRead(BaseModel):
    id: int
    postcard_hash: str
    sender_id: Optional[int] = None
    recipient_id: Optional[int] = None
    template_id: int
    message: Optional[str] = None
    custom_image_url: Optional[str] = None
    is_activated: bool
    activated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    sender: Optional[UserRead] = None
    recipient: Optional[UserRead] = None
    template: Optional[TemplateRead] = None


class ActivateRequest(BaseModel):
    """Body for POST /nfc-postcards/{hash}/activate."""
    model_config = ConfigDict(populate_by_name=True)

    recipient_id: int = Field(..., alias="recipientId", gt=0)


class ActivateResponse(BaseModel):
    success: bool = True
