"""
NFC postcard CRUD operations.

Joined reads select every column of the joined tables under a
`<prefix>__<column>` label and rebuild nested sender / recipient / template
dicts from the flat row. Left-joined users are attached only when the
postcard's foreign key is set; the template is an inner join and must exist.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging

from sqlalchemy import desc, false, func, select, true, update
from sqlalchemy.orm import Session, aliased

from app.core.exceptions import DataIntegrityError, StoreFailure
from app.model.meetup_photo import MeetupPhoto
from app.model.nfc_postcard import NFCPostcard
from app.model.postcard_template import PostcardTemplate
from app.model.user import User
from app.crud.base import CRUDBase
from app.utils.postcard_hash import generate_postcard_hash

logger = logging.getLogger(__name__)

POSTCARD_COLUMNS = tuple(c.name for c in NFCPostcard.__table__.columns)
USER_COLUMNS = tuple(c.name for c in User.__table__.columns)
TEMPLATE_COLUMNS = tuple(c.name for c in PostcardTemplate.__table__.columns)

Sender = aliased(User, name="sender")
Recipient = aliased(User, name="recipient")


class ActivationResult(str, Enum):
    ACTIVATED = "activated"
    NOT_FOUND = "not_found"
    ALREADY_ACTIVATED = "already_activated"


def _labelled(entity, prefix: str, columns: Sequence[str]) -> list:
    return [getattr(entity, name).label(f"{prefix}__{name}") for name in columns]


def _nested(row: Mapping[str, Any], prefix: str, columns: Sequence[str]) -> Dict[str, Any]:
    return {name: row[f"{prefix}__{name}"] for name in columns}


def _attach_user(postcard: Dict[str, Any], row: Mapping[str, Any], prefix: str) -> None:
    """Attach a left-joined user only when the postcard references one."""
    if postcard.get(f"{prefix}_id") is None:
        return
    if row.get(f"{prefix}__id") is None:
        # FK set but the join came back empty: leave the relation off
        logger.warning("Postcard %s references missing %s %s", postcard["id"], prefix, postcard[f"{prefix}_id"])
        return
    postcard[prefix] = _nested(row, prefix, USER_COLUMNS)


def reconstruct_postcard(row: Mapping[str, Any], *, with_recipient: bool = True) -> Dict[str, Any]:
    """
    Rebuild a joined postcard from a flat result row.

    Raises:
        DataIntegrityError: the template columns are empty
    """
    postcard = {name: row[name] for name in POSTCARD_COLUMNS}
    _attach_user(postcard, row, "sender")
    if with_recipient:
        _attach_user(postcard, row, "recipient")
    if row.get("template__id") is None:
        raise DataIntegrityError(f"Postcard {postcard['id']} has no template row")
    postcard["template"] = _nested(row, "template", TEMPLATE_COLUMNS)
    return postcard


class CRUDNFCPostcard(CRUDBase[NFCPostcard, Dict[str, Any], Dict[str, Any]]):
    """Postcard lifecycle: create unactivated, activate once, read joined."""

    def _joined_select(self, *, with_recipient: bool = True):
        columns = [NFCPostcard.__table__.c[name] for name in POSTCARD_COLUMNS]
        columns += _labelled(Sender, "sender", USER_COLUMNS)
        if with_recipient:
            columns += _labelled(Recipient, "recipient", USER_COLUMNS)
        columns += _labelled(PostcardTemplate, "template", TEMPLATE_COLUMNS)

        stmt = select(*columns).select_from(NFCPostcard).outerjoin(Sender, NFCPostcard.sender_id == Sender.id)
        if with_recipient:
            stmt = stmt.outerjoin(Recipient, NFCPostcard.recipient_id == Recipient.id)
        return stmt.join(PostcardTemplate, NFCPostcard.template_id == PostcardTemplate.id)

    def list_all(self, db: Session) -> List[Dict[str, Any]]:
        """Every postcard with sender, recipient and template, newest first."""
        stmt = self._joined_select().order_by(desc(NFCPostcard.created_at), desc(NFCPostcard.id))
        return [reconstruct_postcard(row) for row in db.execute(stmt).mappings()]

    def get_by_hash(self, db: Session, postcard_hash: str) -> Optional[Dict[str, Any]]:
        stmt = self._joined_select().where(NFCPostcard.postcard_hash == postcard_hash)
        row = db.execute(stmt).mappings().first()
        return reconstruct_postcard(row) if row is not None else None

    def list_by_recipient(self, db: Session, *, recipient_id: int) -> List[Dict[str, Any]]:
        """
        Activated postcards received by a user, most recently activated first.
        The recipient is the caller's input, so it is not joined back in.
        """
        stmt = (
            self._joined_select(with_recipient=False)
            .where(NFCPostcard.recipient_id == recipient_id, NFCPostcard.is_activated == true())
            .order_by(desc(NFCPostcard.activated_at), desc(NFCPostcard.id))
        )
        return [reconstruct_postcard(row, with_recipient=False) for row in db.execute(stmt).mappings()]

    def create(
        self,
        db: Session,
        *,
        template_id: int,
        sender_id: Optional[int] = None,
        recipient_id: Optional[int] = None,
        message: Optional[str] = None,
        custom_image_url: Optional[str] = None,
        is_activated: bool = False,
        activated_at: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Insert a postcard under a fresh hash and return it joined.

        A recipient can only be bound to an activated postcard, so passing one
        creates the postcard already activated.
        """
        if recipient_id is None and (is_activated or activated_at is not None):
            raise ValueError("An activated postcard needs a recipient")
        if recipient_id is not None:
            is_activated = True
            activated_at = activated_at or datetime.now(timezone.utc)

        postcard_hash = generate_postcard_hash()
        db.add(
            NFCPostcard(
                postcard_hash=postcard_hash,
                sender_id=sender_id,
                recipient_id=recipient_id,
                template_id=template_id,
                message=message,
                custom_image_url=custom_image_url,
                is_activated=is_activated,
                activated_at=activated_at,
            )
        )
        db.commit()

        created = self.get_by_hash(db, postcard_hash)
        if created is None:
            raise StoreFailure("Failed to retrieve created postcard")
        logger.info(f"Postcard created: {postcard_hash} (template: {template_id}, sender: {sender_id})")
        return created

    def activate(self, db: Session, *, postcard_hash: str, recipient_id: int) -> ActivationResult:
        """
        Bind a recipient to an unactivated postcard.

        The flag check lives in the UPDATE's WHERE clause, so of two concurrent
        claims on the same hash only one can match a row.
        """
        stmt = (
            update(NFCPostcard)
            .where(NFCPostcard.postcard_hash == postcard_hash, NFCPostcard.is_activated == false())
            .values(
                recipient_id=recipient_id,
                is_activated=True,
                activated_at=func.now(),
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        db.commit()

        if result.rowcount == 1:
            logger.info(f"Postcard activated: {postcard_hash} -> recipient {recipient_id}")
            return ActivationResult.ACTIVATED

        exists = db.query(NFCPostcard.id).filter(NFCPostcard.postcard_hash == postcard_hash).first()
        outcome = ActivationResult.ALREADY_ACTIVATED if exists else ActivationResult.NOT_FOUND
        logger.info(f"Postcard activation refused: {postcard_hash} ({outcome.value})")
        return outcome

    def delete(self, db: Session, *, postcard_id: int) -> bool:
        """Delete a postcard and its meetup photos. Returns False if it did not exist."""
        db.query(MeetupPhoto).filter(MeetupPhoto.postcard_id == postcard_id).delete(synchronize_session=False)
        deleted = db.query(self.model).filter(self.model.id == postcard_id).delete(synchronize_session=False)
        db.commit()
        return deleted > 0


nfc_postcard_crud = CRUDNFCPostcard(NFCPostcard)
