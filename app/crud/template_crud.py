"""
Postcard template CRUD.
"""
from typing import List, Optional
from sqlalchemy import desc, true
from sqlalchemy.orm import Session

from app.model.postcard_template import PostcardTemplate
from app.crud.base import CRUDBase


class CRUDTemplate(CRUDBase[PostcardTemplate, dict, dict]):
    def list_active(self, db: Session) -> List[PostcardTemplate]:
        """Active templates only, newest first."""
        return (
            db.query(self.model)
            .filter(self.model.is_active == true())
            .order_by(desc(self.model.created_at), desc(self.model.id))
            .all()
        )

    def get_by_template_id(self, db: Session, template_id: str) -> Optional[PostcardTemplate]:
        return self.get_by_field(db, "template_id", template_id)


template_crud = CRUDTemplate(PostcardTemplate)
