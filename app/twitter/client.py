"""
Twitter OAuth 1.0a client.

Three-legged handshake:
    UNSTARTED -> REQUEST_TOKEN_ISSUED -> ACCESS_GRANTED -> PROFILE_FETCHED

The client is stateless between legs. The request-token secret is handed back
to the caller and must come back with the verifier.
"""
import logging
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl

import httpx
from authlib.integrations.httpx_client import OAuth1Auth
from pydantic import BaseModel

from app.core.config import settings
from app.core.exceptions import UpstreamAuthError

logger = logging.getLogger(__name__)

REQUEST_TOKEN_URL = "https://api.twitter.com/oauth/request_token"
ACCESS_TOKEN_URL = "https://api.twitter.com/oauth/access_token"
AUTHORIZE_URL = "https://api.twitter.com/oauth/authorize"
VERIFY_CREDENTIALS_URL = "https://api.twitter.com/1.1/account/verify_credentials.json"


class OAuthStage(str, Enum):
    UNSTARTED = "unstarted"
    REQUEST_TOKEN_ISSUED = "request_token_issued"
    ACCESS_GRANTED = "access_granted"
    PROFILE_FETCHED = "profile_fetched"


class RequestToken(BaseModel):
    token: str
    token_secret: str
    auth_url: str


class AccessToken(BaseModel):
    token: str
    token_secret: str


class TwitterIdentity(BaseModel):
    """Normalized remote profile."""
    id: str
    username: str
    name: str
    profile_image_url: Optional[str] = None


class TwitterOAuthClient:
    def __init__(
        self,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
        callback_url: Optional[str] = None,
        timeout: float = 15.0,
    ):
        self.consumer_key = consumer_key or settings.TWITTER_CONSUMER_KEY
        self.consumer_secret = consumer_secret or settings.TWITTER_CONSUMER_SECRET
        self.callback_url = callback_url or settings.twitter_callback_url
        self.timeout = timeout

    def _require_credentials(self) -> None:
        if not self.consumer_key or not self.consumer_secret:
            raise UpstreamAuthError(
                OAuthStage.UNSTARTED.value,
                "Twitter OAuth is not configured",
                status_code=503,
            )

    def _auth(
        self,
        token: Optional[str] = None,
        token_secret: Optional[str] = None,
        verifier: Optional[str] = None,
        callback: Optional[str] = None,
    ) -> OAuth1Auth:
        """HMAC-SHA1 request signing in the Authorization header."""
        self._require_credentials()
        return OAuth1Auth(
            self.consumer_key,
            client_secret=self.consumer_secret,
            token=token,
            token_secret=token_secret,
            redirect_uri=callback,
            verifier=verifier,
        )

    def _send(
        self,
        stage: OAuthStage,
        failure: str,
        method: str,
        url: str,
        auth: OAuth1Auth,
        params: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        try:
            with httpx.Client(timeout=self.timeout, auth=auth) as client:
                r = client.request(method, url, params=params)
        except httpx.RequestError as e:
            logger.error(f"Twitter {stage.value} request error: {e}")
            raise UpstreamAuthError(stage.value, f"{failure}: {e}")

        if r.status_code >= 400:
            logger.warning("Twitter %s error %s: %s", stage.value, r.status_code, r.text[:500] if r.text else "")
            raise UpstreamAuthError(
                stage.value,
                f"{failure}: {r.status_code} - {_error_detail(r)}",
                status_code=400 if r.status_code < 500 else 502,
            )
        return r

    def get_request_token(self) -> RequestToken:
        """Leg 1: obtain a request token and the URL the user must visit."""
        stage = OAuthStage.REQUEST_TOKEN_ISSUED
        failure = "Failed to get request token"
        r = self._send(stage, failure, "POST", REQUEST_TOKEN_URL, self._auth(callback=self.callback_url))
        data = dict(parse_qsl(r.text))
        token, token_secret = data.get("oauth_token"), data.get("oauth_token_secret")
        if not token or not token_secret:
            raise UpstreamAuthError(stage.value, f"{failure}: malformed provider response")
        return RequestToken(
            token=token,
            token_secret=token_secret,
            auth_url=f"{AUTHORIZE_URL}?oauth_token={token}",
        )

    def get_access_token(self, request_token: str, request_token_secret: str, verifier: str) -> AccessToken:
        """Leg 2: exchange the verifier for a long-lived access token."""
        stage = OAuthStage.ACCESS_GRANTED
        failure = "Failed to get access token"
        r = self._send(
            stage,
            failure,
            "POST",
            ACCESS_TOKEN_URL,
            self._auth(token=request_token, token_secret=request_token_secret, verifier=verifier),
        )
        data = dict(parse_qsl(r.text))
        if not data.get("oauth_token") or not data.get("oauth_token_secret"):
            raise UpstreamAuthError(stage.value, f"{failure}: malformed provider response")
        return AccessToken(token=data["oauth_token"], token_secret=data["oauth_token_secret"])

    def get_user_data(self, access_token: str, access_token_secret: str) -> TwitterIdentity:
        """Leg 3: fetch and normalize the authenticated profile."""
        stage = OAuthStage.PROFILE_FETCHED
        r = self._send(
            stage,
            "Failed to get user data",
            "GET",
            VERIFY_CREDENTIALS_URL,
            self._auth(token=access_token, token_secret=access_token_secret),
            params={"include_email": "true"},
        )
        try:
            data = r.json()
            return TwitterIdentity(
                id=str(data["id_str"]),
                username=data["screen_name"],
                name=data.get("name") or data["screen_name"],
                profile_image_url=data.get("profile_image_url_https"),
            )
        except (ValueError, KeyError, TypeError):
            raise UpstreamAuthError(stage.value, "Failed to parse user data")

    def complete_oauth_flow(self, request_token: str, request_token_secret: str, verifier: str) -> TwitterIdentity:
        access = self.get_access_token(request_token, request_token_secret, verifier)
        return self.get_user_data(access.token, access.token_secret)


def _error_detail(r: httpx.Response) -> str:
    if not r.text:
        return "no response body"
    try:
        body: Any = r.json()
    except ValueError:
        return r.text[:300]
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            return str(errors[0].get("message") or errors[0])
        return str(body.get("error") or body)[:300]
    return str(body)[:300]
