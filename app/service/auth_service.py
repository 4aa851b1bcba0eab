"""
Authentication service: Twitter login, identity linking and sessions.
"""
from typing import Optional
from sqlalchemy.orm import Session
from app.core.exceptions import AlreadyExists
from app.crud import user_crud
from app.model.user import User
from app.schema.auth import LoginResponse, RequestTokenResponse
from app.schema.user import UserCreate, UserRead
from app.session import close_session, open_session
from app.twitter import TwitterIdentity, TwitterOAuthClient
from app.utils.identity import Platform
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """Handles Twitter sign-in and local session lifecycle."""

    def __init__(self, db: Session, oauth: Optional[TwitterOAuthClient] = None):
        self.db = db
        self.oauth = oauth or TwitterOAuthClient()

    def start_login(self) -> RequestTokenResponse:
        """
        Leg 1. The token secret is not persisted server-side; the client keeps
        it across the provider redirect and sends it back to the callback.
        """
        request_token = self.oauth.get_request_token()
        return RequestTokenResponse(
            authUrl=request_token.auth_url,
            requestToken=request_token.token,
            requestTokenSecret=request_token.token_secret,
        )

    def complete_login(self, oauth_token: str, oauth_token_secret: str, oauth_verifier: str) -> LoginResponse:
        """Legs 2 and 3, then link the remote identity and open a session."""
        identity = self.oauth.complete_oauth_flow(oauth_token, oauth_token_secret, oauth_verifier)
        user = self.link_identity(identity)

        user_info = UserRead.model_validate(user)
        token = open_session(user_info.model_dump(mode="json"))
        logger.info(f"User logged in via Twitter: {user.slug}")
        return LoginResponse(user=user_info, access_token=token)

    def link_identity(self, identity: TwitterIdentity) -> User:
        """
        Resolve the local user for a Twitter identity.

        Lookup order: linked external id, then an unlinked user with the same
        handle (first login claims it), else a new user. Losing an insert race to
        another login for the same account returns that account.
        """
        platform = Platform.TWITTER.value
        user = user_crud.get_by_external_id(self.db, external_id=identity.id, platform=platform)
        if user:
            return user

        user = user_crud.get_by_handle(self.db, handle=identity.username, platform=platform)
        if user and user.external_id is None:
            logger.info(f"Linking Twitter id {identity.id} to existing user {user.slug}")
            return user_crud.update(self.db, db_obj=user, obj_in={"external_id": identity.id})

        try:
            return user_crud.create(
                self.db,
                obj_in=UserCreate(name=identity.name, handle=identity.username, platform=Platform.TWITTER),
                external_id=identity.id,
            )
        except AlreadyExists:
            # A concurrent first login for the same account inserted it first
            user = user_crud.get_by_external_id(self.db, external_id=identity.id, platform=platform)
            if user is None:
                raise
            return user

    def logout(self, token: str) -> bool:
        return close_session(token)
