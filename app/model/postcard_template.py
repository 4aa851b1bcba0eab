"""
Postcard template model.
"""
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, true
from sqlalchemy.sql import func
from app.core.database import Base


class PostcardTemplate(Base):
    __tablename__ = "postcard_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    image_url = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
