"""
Shared pytest fixtures.

- In-memory SQLite database (schema created and dropped per test)
- In-memory Redis double for the session layer
- FastAPI TestClient
- Small factories for users, templates and postcards
"""
from __future__ import annotations

import os
from typing import Dict, Generator, Optional

# Settings are read at import time, so the environment must be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TWITTER_CONSUMER_KEY"] = "test-consumer-key"
os.environ["TWITTER_CONSUMER_SECRET"] = "test-consumer-secret"
os.environ["FRONTEND_URL"] = "https://retodoku.test"
os.environ.pop("TWITTER_CALLBACK_URL", None)
os.environ.pop("AWS_SECRETS_NAME", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.database import Base, SessionLocal, engine
from app.crud import nfc_postcard_crud, template_crud, user_crud
from app.model import MeetupPhoto, NFCPostcard, PostcardTemplate, User  # noqa: F401
from app.schema.user import UserCreate
from app.session import session_layer
from app.utils.identity import Platform
from main import app


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class InMemoryRedis:
    """The subset of redis.Redis the session layer uses."""

    def __init__(self) -> None:
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}

    def setex(self, key: str, ttl: int, value: str) -> bool:
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def get(self, key: str) -> Optional[str]:
        return self.store.get(key)

    def delete(self, key: str) -> int:
        self.ttls.pop(key, None)
        return 1 if self.store.pop(key, None) is not None else 0

    def expire(self, key: str, ttl: int) -> bool:
        if key not in self.store:
            return False
        self.ttls[key] = ttl
        return True


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Fresh schema per test on the shared in-memory engine."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_redis(monkeypatch: pytest.MonkeyPatch) -> InMemoryRedis:
    client = InMemoryRedis()
    monkeypatch.setattr(session_layer, "_redis_client", client)
    return client


@pytest.fixture
def client(db: Session, fake_redis: InMemoryRedis) -> TestClient:
    """TestClient without lifespan; tables come from the db fixture."""
    return TestClient(app)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_user(db: Session):
    def _make(handle: str, platform: Platform = Platform.TWITTER, name: Optional[str] = None, external_id: Optional[str] = None) -> User:
        return user_crud.create(
            db,
            obj_in=UserCreate(name=name or handle.title(), handle=handle, platform=platform),
            external_id=external_id,
        )

    return _make


@pytest.fixture
def make_template(db: Session):
    def _make(template_id: str = "classic-white", is_active: bool = True) -> PostcardTemplate:
        return template_crud.create_from_dict(
            db,
            obj_in={
                "template_id": template_id,
                "name": template_id.replace("-", " ").title(),
                "image_url": f"/templates/{template_id}.png",
                "description": None,
                "is_active": is_active,
            },
        )

    return _make


@pytest.fixture
def template(make_template) -> PostcardTemplate:
    return make_template()


@pytest.fixture
def make_postcard(db: Session, template: PostcardTemplate):
    def _make(**kwargs) -> dict:
        kwargs.setdefault("template_id", template.id)
        return nfc_postcard_crud.create(db, **kwargs)

    return _make
