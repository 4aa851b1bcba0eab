"""
Twitter integration layer.
"""
from app.twitter.client import (
    AccessToken,
    OAuthStage,
    RequestToken,
    TwitterIdentity,
    TwitterOAuthClient,
)

__all__ = [
    "AccessToken",
    "OAuthStage",
    "RequestToken",
    "TwitterIdentity",
    "TwitterOAuthClient",
]
