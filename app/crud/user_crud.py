"""
User CRUD operations.
"""
from typing import List, Optional
import logging
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import AlreadyExists
from app.model.user import User
from app.schema.user import UserCreate
from app.crud.base import CRUDBase
from app.utils.identity import Platform, generate_slug

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, UserCreate, dict]):
    """User-specific CRUD operations."""

    def list_all(self, db: Session) -> List[User]:
        """All users, newest first."""
        return db.query(self.model).order_by(desc(self.model.created_at), desc(self.model.id)).all()

    def get_by_slug(self, db: Session, slug: str) -> Optional[User]:
        return self.get_by_field(db, "slug", slug)

    def get_by_handle(self, db: Session, *, handle: str, platform: str) -> Optional[User]:
        """Handles are unique per platform, not globally."""
        return (
            db.query(self.model)
            .filter(self.model.handle == handle, self.model.platform == platform)
            .first()
        )

    def get_by_external_id(self, db: Session, *, external_id: str, platform: str = Platform.TWITTER.value) -> Optional[User]:
        return (
            db.query(self.model)
            .filter(self.model.external_id == external_id, self.model.platform == platform)
            .first()
        )

    def create(self, db: Session, *, obj_in: UserCreate, external_id: Optional[str] = None) -> User:
        """Create a user; the slug is derived from platform and handle."""
        platform = obj_in.platform.value
        data = {
            "name": obj_in.name,
            "handle": obj_in.handle,
            "platform": platform,
            "slug": generate_slug(platform, obj_in.handle),
            "external_id": external_id,
        }
        try:
            user = self.create_from_dict(db, obj_in=data)
        except IntegrityError:
            db.rollback()
            raise AlreadyExists("User")
        logger.info(f"User created: {user.slug} (id: {user.id})")
        return user


user_crud = CRUDUser(User)
