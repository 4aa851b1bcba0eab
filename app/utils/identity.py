"""
Derived user identifiers: slug and avatar URL.
"""
from enum import Enum


class Platform(str, Enum):
    TWITTER = "twitter"
    TELEGRAM = "telegram"
    EMAIL = "email"
    OTHER = "other"


def generate_slug(platform: str, handle: str) -> str:
    """Slug used in collection URLs: '<platform>-<handle>'."""
    platform = platform.value if isinstance(platform, Platform) else platform
    return f"{platform}-{handle}"


def avatar_url(platform: str, handle: str) -> str:
    platform = platform.value if isinstance(platform, Platform) else platform
    if platform == Platform.TWITTER.value:
        return f"https://unavatar.io/x/{handle}"
    if platform == Platform.TELEGRAM.value:
        return f"https://unavatar.io/telegram/{handle}"
    return f"https://unavatar.io/{handle}"
