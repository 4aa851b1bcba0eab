"""
NFC postcard model.
A postcard is addressed by its hash (the value written to the NFC tag) and is
activated exactly once, when a recipient claims it.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, false
from sqlalchemy.sql import func
from app.core.database import Base


class NFCPostcard(Base):
    __tablename__ = "nfc_postcards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    postcard_hash = Column(String(32), unique=True, index=True, nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)  # NULL = anonymous
    recipient_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)  # NULL until activated
    template_id = Column(Integer, ForeignKey("postcard_templates.id"), nullable=False)

    message = Column(Text, nullable=True)
    custom_image_url = Column(String, nullable=True)  # overrides the template image

    # is_activated, recipient_id and activated_at change together, once
    is_activated = Column(Boolean, nullable=False, default=False, server_default=false())
    activated_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
