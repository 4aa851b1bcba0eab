"""
Login sessions kept in Redis.

A successful Twitter login stores a snapshot of the local user under an
opaque bearer token. Reads slide the expiry forward, so an active user stays
signed in while an idle token lapses after SESSION_TTL seconds.
"""
from typing import Optional, Dict, Any
import logging
import json
import secrets
import redis

logger = logging.getLogger(__name__)

SESSION_PREFIX = "session:"

_redis_client: Optional[redis.Redis] = None
_session_ttl: int = 86400


def init_redis(host: str, port: int, db: int, session_ttl: int = 86400) -> None:
    """Connect the session store. Called from the app lifespan."""
    global _redis_client, _session_ttl
    pool = redis.ConnectionPool(host=host, port=port, db=db, decode_responses=True, max_connections=10)
    _redis_client = redis.Redis(connection_pool=pool)
    _session_ttl = session_ttl
    logger.info(f"Session store on redis {host}:{port}/{db}, idle expiry {session_ttl}s")


def _store() -> redis.Redis:
    if _redis_client is None:
        raise RuntimeError("Session store not initialized; call init_redis() at startup")
    return _redis_client


def _key(token: str) -> str:
    return f"{SESSION_PREFIX}{token}"


def open_session(user: Dict[str, Any]) -> str:
    """Mint a bearer token for the user snapshot and return it."""
    token = secrets.token_urlsafe(32)
    _store().setex(_key(token), _session_ttl, json.dumps(user))
    logger.info(f"Session opened for {user.get('slug')}")
    return token


def load_session(token: str) -> Optional[Dict[str, Any]]:
    """User snapshot for a live token, or None. Extends the idle expiry."""
    store = _store()
    raw = store.get(_key(token))
    if raw is None:
        return None
    store.expire(_key(token), _session_ttl)
    return json.loads(raw)


def close_session(token: str) -> bool:
    if _store().delete(_key(token)) == 0:
        return False
    logger.info("Session closed")
    return True


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Token part of 'Bearer <token>'; None for any other shape."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token or " " in token:
        return None
    return token
