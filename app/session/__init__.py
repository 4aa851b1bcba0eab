from .session_layer import (
    init_redis,
    open_session,
    load_session,
    close_session,
    parse_bearer,
)

__all__ = [
    "init_redis",
    "open_session",
    "load_session",
    "close_session",
    "parse_bearer",
]
