"""
Meetup photo CRUD.
"""
from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.model.meetup_photo import MeetupPhoto
from app.schema.meetup_photo import MeetupPhotoCreate
from app.crud.base import CRUDBase


class CRUDMeetupPhoto(CRUDBase[MeetupPhoto, MeetupPhotoCreate, dict]):
    def list_by_postcard(self, db: Session, *, postcard_id: int) -> List[MeetupPhoto]:
        """Photos for a postcard, latest upload first."""
        return (
            db.query(self.model)
            .filter(self.model.postcard_id == postcard_id)
            .order_by(desc(self.model.uploaded_at), desc(self.model.id))
            .all()
        )

    def create(self, db: Session, *, obj_in: MeetupPhotoCreate) -> MeetupPhoto:
        return self.create_from_dict(db, obj_in=obj_in.model_dump())


meetup_photo_crud = CRUDMeetupPhoto(MeetupPhoto)
