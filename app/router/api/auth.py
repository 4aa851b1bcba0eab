"""
Authentication router - Twitter OAuth login, current session, logout.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.dependencies import current_user, session_token
from app.service.auth_service import AuthService
from app.schema.auth import LoginResponse, MessageResponse, RequestTokenResponse, TwitterCallback
from app.schema.user import UserRead
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/twitter/request-token", response_model=RequestTokenResponse)
async def twitter_request_token(db: Session = Depends(get_db)):
    """Start Twitter login. The client must keep requestTokenSecret for the callback."""
    return AuthService(db).start_login()


@router.post("/twitter/callback", response_model=LoginResponse)
async def twitter_callback(data: TwitterCallback, db: Session = Depends(get_db)):
    """Finish Twitter login: link or create the local user and open a session."""
    return AuthService(db).complete_login(data.oauth_token, data.oauth_token_secret, data.oauth_verifier)


@router.get("/me", response_model=UserRead)
async def get_me(user: UserRead = Depends(current_user)):
    """User snapshot stored in the session."""
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: UserRead = Depends(current_user),
    token: str = Depends(session_token),
    db: Session = Depends(get_db)
):
    """Invalidate the session token server-side."""
    AuthService(db).logout(token)
    logger.info(f"User logged out: {user.slug}")
    return MessageResponse(message="Logged out successfully")
