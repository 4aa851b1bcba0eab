from app.model.user import User
from app.model.postcard_template import PostcardTemplate
from app.model.nfc_postcard import NFCPostcard
from app.model.meetup_photo import MeetupPhoto

__all__ = ["User", "PostcardTemplate", "NFCPostcard", "MeetupPhoto"]
