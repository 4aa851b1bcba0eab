"""
Meetup photo model. Owned by its postcard; removed with it.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func
from app.core.database import Base


class MeetupPhoto(Base):
    __tablename__ = "meetup_photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    postcard_id = Column(Integer, ForeignKey("nfc_postcards.id", ondelete="CASCADE"), nullable=False, index=True)
    photo_url = Column(String, nullable=False)
    caption = Column(Text, nullable=True)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now())
