"""
Generic CRUD base.
"""
from typing import Any, Dict, Generic, Optional, Type, TypeVar
from sqlalchemy.orm import Session

from app.core.database import Base
from app.core.exceptions import StoreFailure

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType")
UpdateSchemaType = TypeVar("UpdateSchemaType")


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Shared get/create/update helpers for a single model."""

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_by_field(self, db: Session, field: str, value: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(getattr(self.model, field) == value).first()

    def create_from_dict(self, db: Session, *, obj_in: Dict[str, Any]) -> ModelType:
        """
        Insert a row, then re-read it by its generated id so server-side
        defaults (timestamps) are populated.

        Raises:
            StoreFailure: the row could not be read back after commit
        """
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        db.commit()
        stored = self.get(db, db_obj.id)
        if stored is None:
            raise StoreFailure(f"Failed to retrieve created {self.model.__name__}")
        db.refresh(stored)
        return stored

    def update(self, db: Session, *, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj
