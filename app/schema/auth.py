"""
Authentication schemas.
"""
from pydantic import BaseModel, Field

from app.schema.user import UserRead


class RequestTokenResponse(BaseModel):
    authUrl: str
    requestToken: str
    requestTokenSecret: str


class TwitterCallback(BaseModel):
    oauth_token: str = Field(..., min_length=1)
    oauth_verifier: str = Field(..., min_length=1)
    oauth_token_secret: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    user: UserRead
    access_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str
