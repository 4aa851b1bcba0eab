"""
Meetup photos API.
"""
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.exceptions import NotFound
from app.crud import meetup_photo_crud, nfc_postcard_crud
from app.schema.meetup_photo import MeetupPhotoCreate, MeetupPhotoRead

router = APIRouter()


@router.get("/postcard/{postcard_id}", response_model=List[MeetupPhotoRead])
async def list_meetup_photos(postcard_id: int = Path(..., gt=0), db: Session = Depends(get_db)):
    return meetup_photo_crud.list_by_postcard(db, postcard_id=postcard_id)


@router.post("", response_model=MeetupPhotoRead, status_code=status.HTTP_201_CREATED)
async def create_meetup_photo(photo_in: MeetupPhotoCreate, db: Session = Depends(get_db)):
    if nfc_postcard_crud.get(db, photo_in.postcard_id) is None:
        raise NotFound("Postcard")
    return meetup_photo_crud.create(db, obj_in=photo_in)
