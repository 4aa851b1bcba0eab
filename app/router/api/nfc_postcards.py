"""
NFC postcards API: list, create, get by hash, activate, list by recipient, delete.

Joined postcards are serialized with exclude_unset so a missing sender or
recipient is left out of the body rather than sent as null.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import AlreadyActivated, NotFound, ValidationFailed
from app.crud import ActivationResult, nfc_postcard_crud, template_crud, user_crud
from app.schema.nfc_postcard import (
    ActivateRequest,
    ActivateResponse,
    NFCPostcardCreate,
    NFCPostcardRead,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _require_user(db: Session, user_id: int, role: str) -> None:
    if user_crud.get(db, user_id) is None:
        raise ValidationFailed(f"{role} not found")


@router.get("", response_model=List[NFCPostcardRead], response_model_exclude_unset=True)
async def list_postcards(db: Session = Depends(get_db)):
    """All postcards with sender, recipient and template, newest first."""
    return [NFCPostcardRead.model_validate(p) for p in nfc_postcard_crud.list_all(db)]


@router.post(
    "",
    response_model=NFCPostcardRead,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_postcard(payload: NFCPostcardCreate, db: Session = Depends(get_db)):
    """
    Create a postcard under a fresh hash. Without recipient_id it starts
    unactivated; with one it is delivered (activated) immediately.
    """
    template = template_crud.get(db, payload.template_id)
    if template is None or not template.is_active:
        raise ValidationFailed("Template not found or inactive")
    if payload.sender_id is not None:
        _require_user(db, payload.sender_id, "Sender")
    if payload.recipient_id is not None:
        _require_user(db, payload.recipient_id, "Recipient")

    postcard = nfc_postcard_crud.create(
        db,
        template_id=payload.template_id,
        sender_id=payload.sender_id,
        recipient_id=payload.recipient_id,
        message=payload.message,
        custom_image_url=payload.custom_image_url,
    )
    return NFCPostcardRead.model_validate(postcard)


@router.get(
    "/recipient/{recipient_id}",
    response_model=List[NFCPostcardRead],
    response_model_exclude_unset=True,
)
async def list_postcards_by_recipient(recipient_id: int = Path(..., gt=0), db: Session = Depends(get_db)):
    """A user's collection: activated postcards only, latest activation first."""
    return [
        NFCPostcardRead.model_validate(p)
        for p in nfc_postcard_crud.list_by_recipient(db, recipient_id=recipient_id)
    ]


@router.get("/{postcard_hash}", response_model=NFCPostcardRead, response_model_exclude_unset=True)
async def get_postcard(postcard_hash: str, db: Session = Depends(get_db)):
    postcard = nfc_postcard_crud.get_by_hash(db, postcard_hash)
    if postcard is None:
        raise NotFound("Postcard")
    return NFCPostcardRead.model_validate(postcard)


@router.post("/{postcard_hash}/activate", response_model=ActivateResponse)
async def activate_postcard(postcard_hash: str, payload: ActivateRequest, db: Session = Depends(get_db)):
    """
    Claim a postcard for a recipient. First claim wins:
    404 for an unknown hash, 409 when it was already activated.
    """
    _require_user(db, payload.recipient_id, "Recipient")
    result = nfc_postcard_crud.activate(db, postcard_hash=postcard_hash, recipient_id=payload.recipient_id)
    if result is ActivationResult.NOT_FOUND:
        raise NotFound("Postcard")
    if result is ActivationResult.ALREADY_ACTIVATED:
        raise AlreadyActivated()
    return ActivateResponse(success=True)


@router.delete("/{postcard_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_postcard(postcard_id: int = Path(..., gt=0), db: Session = Depends(get_db)):
    """Delete a postcard together with its meetup photos."""
    if not nfc_postcard_crud.delete(db, postcard_id=postcard_id):
        raise NotFound("Postcard")
    logger.info(f"Postcard deleted: {postcard_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
