"""
Postcard template schemas.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class TemplateRead(BaseModel):
    id: int
    template_id: str
    name: str
    image_url: str
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
