"""
Tests for derived identifiers: user slugs, avatar URLs and postcard hashes.
"""

from __future__ import annotations

import pytest

from app.utils.identity import Platform, avatar_url, generate_slug
from app.utils.postcard_hash import HASH_ALPHABET, HASH_LENGTH, generate_postcard_hash


class TestSlug:
    @pytest.mark.parametrize(
        "platform, handle, expected",
        [
            ("twitter", "ann", "twitter-ann"),
            ("telegram", "bob_99", "telegram-bob_99"),
            ("email", "c@example.com", "email-c@example.com"),
            (Platform.OTHER, "dee", "other-dee"),
        ],
    )
    def test_slug_is_platform_dash_handle(self, platform, handle, expected) -> None:
        assert generate_slug(platform, handle) == expected

    def test_slug_is_deterministic(self) -> None:
        assert generate_slug("twitter", "ann") == generate_slug(Platform.TWITTER, "ann")

    def test_same_handle_on_other_platform_differs(self) -> None:
        assert generate_slug("twitter", "ann") != generate_slug("telegram", "ann")


class TestAvatarUrl:
    def test_twitter_uses_x_provider(self) -> None:
        assert avatar_url("twitter", "ann") == "https://unavatar.io/x/ann"

    def test_telegram(self) -> None:
        assert avatar_url(Platform.TELEGRAM, "ann") == "https://unavatar.io/telegram/ann"

    @pytest.mark.parametrize("platform", ["email", "other"])
    def test_fallback_is_bare_handle(self, platform) -> None:
        assert avatar_url(platform, "ann@example.com") == "https://unavatar.io/ann@example.com"


class TestPostcardHash:
    def test_length_and_alphabet(self) -> None:
        value = generate_postcard_hash()
        assert len(value) == HASH_LENGTH == 32
        assert set(value) <= set(HASH_ALPHABET)

    def test_hashes_do_not_repeat(self) -> None:
        hashes = {generate_postcard_hash() for _ in range(2000)}
        assert len(hashes) == 2000
