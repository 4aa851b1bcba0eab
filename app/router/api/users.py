"""
Users API: list, create, lookup by slug or Twitter id.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.exceptions import NotFound
from app.crud import user_crud
from app.schema.user import UserCreate, UserRead
from app.utils.identity import Platform

router = APIRouter()


@router.get("", response_model=List[UserRead])
async def list_users(db: Session = Depends(get_db)):
    """All users, newest first."""
    return user_crud.list_all(db)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(user_in: UserCreate, db: Session = Depends(get_db)):
    """Create a user. The slug is '<platform>-<handle>'; 409 if it is taken."""
    return user_crud.create(db, obj_in=user_in)


@router.get("/slug/{slug}", response_model=UserRead)
async def get_user_by_slug(slug: str, db: Session = Depends(get_db)):
    user = user_crud.get_by_slug(db, slug)
    if not user:
        raise NotFound("User")
    return user


@router.get("/twitter/{external_id}", response_model=UserRead)
async def get_user_by_twitter_id(external_id: str, db: Session = Depends(get_db)):
    user = user_crud.get_by_external_id(db, external_id=external_id, platform=Platform.TWITTER.value)
    if not user:
        raise NotFound("User")
    return user
