from app.crud.user_crud import user_crud
from app.crud.template_crud import template_crud
from app.crud.nfc_postcard_crud import nfc_postcard_crud, ActivationResult
from app.crud.meetup_photo_crud import meetup_photo_crud

__all__ = [
    "user_crud",
    "template_crud",
    "nfc_postcard_crud",
    "meetup_photo_crud",
    "ActivationResult",
]
