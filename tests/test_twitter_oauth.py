"""
Tests for the Twitter OAuth 1.0a handshake client.

HTTP legs are mocked with respx. Signed headers are checked with a small
RFC 5849 verifier, itself pinned to the worked example in Twitter's
"Creating a signature" documentation.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import re
from urllib.parse import quote, unquote

import httpx
import pytest
import respx

from app.core.exceptions import UpstreamAuthError
from app.twitter import OAuthStage, TwitterOAuthClient
from app.twitter.client import (
    ACCESS_TOKEN_URL,
    REQUEST_TOKEN_URL,
    VERIFY_CREDENTIALS_URL,
)


# ---------------------------------------------------------------------------
# Signature verifier
# ---------------------------------------------------------------------------


def _enc(value: str) -> str:
    return quote(value, safe="~")


def _signature(method: str, url: str, params: dict, consumer_secret: str, token_secret: str = "") -> str:
    normalized = "&".join(f"{k}={v}" for k, v in sorted((_enc(k), _enc(v)) for k, v in params.items()))
    base = "&".join([method.upper(), _enc(url), _enc(normalized)])
    key = f"{_enc(consumer_secret)}&{_enc(token_secret)}"
    return base64.b64encode(hmac.new(key.encode(), base.encode(), hashlib.sha1).digest()).decode()


def _oauth_params(header: str) -> dict:
    assert header.startswith("OAuth ")
    return {k: unquote(v) for k, v in re.findall(r'(\w+)="([^"]*)"', header)}


def _assert_signed(request: httpx.Request, consumer_secret: str, token_secret: str = "") -> dict:
    params = _oauth_params(request.headers["Authorization"])
    signature = params.pop("oauth_signature")
    params.pop("realm", None)
    signed = {**params, **dict(request.url.params)}
    base_url = str(request.url.copy_with(query=None))
    assert signature == _signature(request.method, base_url, signed, consumer_secret, token_secret)
    return params


def test_verifier_matches_documented_example() -> None:
    params = {
        "status": "Hello Ladies + Gentlemen, a signed OAuth request!",
        "include_entities": "true",
        "oauth_consumer_key": "xvz1evFS4wEEPTGEFPHBog",
        "oauth_nonce": "kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg",
        "oauth_signature_method": "HMAC-SHA1",
        "oauth_timestamp": "1318622958",
        "oauth_token": "370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb",
        "oauth_version": "1.0",
    }
    assert _signature(
        "POST",
        "https://api.twitter.com/1.1/statuses/update.json",
        params,
        "kAcSOqF21Fu85e7zjz7ZN2U4ZRhfV3WpwPAoE3Z7kBw",
        "LswwdoUaIvS8ltyTt5jkRh4J50vUPVVHtR2YPi5kE",
    ) == "hCtSmYh+iHYCEqBWrE7C7hYmtUk="


# ---------------------------------------------------------------------------
# Handshake client
# ---------------------------------------------------------------------------


@pytest.fixture
def oauth() -> TwitterOAuthClient:
    return TwitterOAuthClient(
        consumer_key="ck",
        consumer_secret="cs",
        callback_url="https://retodoku.test/auth/twitter/callback",
    )


PROFILE = {
    "id": 42,
    "id_str": "42",
    "screen_name": "ann",
    "name": "Ann",
    "profile_image_url_https": "https://pbs.twimg.com/ann.jpg",
}


class TestRequestToken:
    @respx.mock
    def test_issues_token_and_authorize_url(self, oauth: TwitterOAuthClient) -> None:
        route = respx.post(REQUEST_TOKEN_URL).mock(
            return_value=httpx.Response(200, text="oauth_token=rt&oauth_token_secret=rs&oauth_callback_confirmed=true")
        )

        token = oauth.get_request_token()

        assert token.token == "rt"
        assert token.token_secret == "rs"
        assert token.auth_url == "https://api.twitter.com/oauth/authorize?oauth_token=rt"
        params = _assert_signed(route.calls.last.request, "cs")
        assert params["oauth_callback"] == "https://retodoku.test/auth/twitter/callback"
        assert params["oauth_consumer_key"] == "ck"
        assert params["oauth_signature_method"] == "HMAC-SHA1"
        assert "oauth_token" not in params

    @respx.mock
    def test_provider_rejection_is_a_400(self, oauth: TwitterOAuthClient) -> None:
        respx.post(REQUEST_TOKEN_URL).mock(
            return_value=httpx.Response(401, json={"errors": [{"code": 32, "message": "Could not authenticate you."}]})
        )

        with pytest.raises(UpstreamAuthError) as exc:
            oauth.get_request_token()

        assert exc.value.status_code == 400
        assert exc.value.stage == OAuthStage.REQUEST_TOKEN_ISSUED.value
        assert "Failed to get request token" in exc.value.message
        assert "Could not authenticate you." in exc.value.message

    @respx.mock
    def test_provider_outage_is_a_502(self, oauth: TwitterOAuthClient) -> None:
        respx.post(REQUEST_TOKEN_URL).mock(return_value=httpx.Response(503, text="over capacity"))

        with pytest.raises(UpstreamAuthError) as exc:
            oauth.get_request_token()

        assert exc.value.status_code == 502

    @respx.mock
    def test_network_error_is_a_502(self, oauth: TwitterOAuthClient) -> None:
        respx.post(REQUEST_TOKEN_URL).mock(side_effect=httpx.ConnectError("boom"))

        with pytest.raises(UpstreamAuthError) as exc:
            oauth.get_request_token()

        assert exc.value.status_code == 502

    @respx.mock
    def test_malformed_body(self, oauth: TwitterOAuthClient) -> None:
        respx.post(REQUEST_TOKEN_URL).mock(return_value=httpx.Response(200, text="nonsense"))

        with pytest.raises(UpstreamAuthError):
            oauth.get_request_token()

    def test_unconfigured_client_is_a_503(self) -> None:
        client = TwitterOAuthClient(consumer_key="ck", consumer_secret="cs")
        client.consumer_key = None

        with pytest.raises(UpstreamAuthError) as exc:
            client.get_request_token()

        assert exc.value.status_code == 503
        assert exc.value.stage == OAuthStage.UNSTARTED.value


class TestCompleteFlow:
    @respx.mock
    def test_access_token_then_profile(self, oauth: TwitterOAuthClient) -> None:
        access = respx.post(ACCESS_TOKEN_URL).mock(
            return_value=httpx.Response(200, text="oauth_token=at&oauth_token_secret=as&user_id=42&screen_name=ann")
        )
        profile = respx.get(url__startswith=VERIFY_CREDENTIALS_URL).mock(return_value=httpx.Response(200, json=PROFILE))

        identity = oauth.complete_oauth_flow("rt", "rs", "verifier-1")

        assert identity.id == "42"
        assert identity.username == "ann"
        assert identity.name == "Ann"
        assert identity.profile_image_url == "https://pbs.twimg.com/ann.jpg"
        access_params = _assert_signed(access.calls.last.request, "cs", "rs")
        assert access_params["oauth_verifier"] == "verifier-1"
        assert access_params["oauth_token"] == "rt"
        profile_request = profile.calls.last.request
        profile_params = _assert_signed(profile_request, "cs", "as")
        assert profile_params["oauth_token"] == "at"
        assert "oauth_verifier" not in profile_params
        assert profile_request.url.params["include_email"] == "true"

    @respx.mock
    def test_denied_verifier(self, oauth: TwitterOAuthClient) -> None:
        respx.post(ACCESS_TOKEN_URL).mock(return_value=httpx.Response(401, text="Invalid oauth_verifier parameter"))

        with pytest.raises(UpstreamAuthError) as exc:
            oauth.complete_oauth_flow("rt", "rs", "bad")

        assert exc.value.status_code == 400
        assert exc.value.stage == OAuthStage.ACCESS_GRANTED.value
        assert "Invalid oauth_verifier parameter" in exc.value.message

    @respx.mock
    def test_unparseable_profile(self, oauth: TwitterOAuthClient) -> None:
        respx.get(url__startswith=VERIFY_CREDENTIALS_URL).mock(return_value=httpx.Response(200, json={"unexpected": True}))

        with pytest.raises(UpstreamAuthError) as exc:
            oauth.get_user_data("at", "as")

        assert exc.value.message == "Failed to parse user data"
        assert exc.value.stage == OAuthStage.PROFILE_FETCHED.value

    @respx.mock
    def test_name_falls_back_to_handle(self, oauth: TwitterOAuthClient) -> None:
        respx.get(url__startswith=VERIFY_CREDENTIALS_URL).mock(
            return_value=httpx.Response(200, json={"id_str": "7", "screen_name": "bob", "name": ""})
        )

        identity = oauth.get_user_data("at", "as")

        assert identity.name == "bob"
        assert identity.profile_image_url is None
