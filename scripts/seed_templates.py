"""
Seed the default postcard templates.
Run from project root: python -m scripts.seed_templates

Idempotent: templates are matched on template_id; existing rows get their
name, image and description refreshed, new ones are inserted active.
Set TEMPLATES_JSON to a file path to seed from a JSON list instead.
"""
import json
import logging
import os
import sys
from typing import Any, Dict, List, Tuple

# Add project root so app imports work
sys.path.insert(0, ".")

from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.crud import template_crud

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES: List[Dict[str, Any]] = [
    {
        "template_id": "classic-white",
        "name": "Classic White",
        "image_url": "/templates/classic-white.png",
        "description": "Plain card with room for a long message",
    },
    {
        "template_id": "sakura",
        "name": "Sakura",
        "image_url": "/templates/sakura.png",
        "description": "Cherry blossoms, for spring meetups",
    },
    {
        "template_id": "night-city",
        "name": "Night City",
        "image_url": "/templates/night-city.png",
        "description": None,
    },
]


def load_templates() -> List[Dict[str, Any]]:
    path = os.environ.get("TEMPLATES_JSON")
    if not path:
        return DEFAULT_TEMPLATES
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of templates")
    return data


def seed_templates(db: Session, templates: List[Dict[str, Any]]) -> Tuple[int, int]:
    """Returns (created, updated)."""
    created = updated = 0
    for item in templates:
        if not item.get("template_id") or not item.get("name") or not item.get("image_url"):
            logger.warning(f"Skipping template without template_id/name/image_url: {item}")
            continue
        existing = template_crud.get_by_template_id(db, item["template_id"])
        fields = {
            "name": item["name"],
            "image_url": item["image_url"],
            "description": item.get("description"),
        }
        if existing:
            template_crud.update(db, db_obj=existing, obj_in=fields)
            updated += 1
        else:
            template_crud.create_from_dict(
                db,
                obj_in={"template_id": item["template_id"], "is_active": item.get("is_active", True), **fields},
            )
            created += 1
    return created, updated


def main() -> None:
    db = SessionLocal()
    try:
        created, updated = seed_templates(db, load_templates())
    finally:
        db.close()
    logger.info(f"Templates seeded: {created} created, {updated} updated")


if __name__ == "__main__":
    main()
