"""
Postcard templates API.
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.exceptions import NotFound
from app.crud import template_crud
from app.schema.template import TemplateRead

router = APIRouter()


@router.get("", response_model=List[TemplateRead])
async def list_templates(db: Session = Depends(get_db)):
    """Active templates, newest first."""
    return template_crud.list_active(db)


@router.get("/{template_id}", response_model=TemplateRead)
async def get_template(template_id: str, db: Session = Depends(get_db)):
    """Lookup by the template's string identifier (e.g. 'sakura-2024')."""
    template = template_crud.get_by_template_id(db, template_id)
    if not template:
        raise NotFound("Template")
    return template
