"""
Pytest fixtures for session service tests.

Provides a hand-driven clock, test settings, and managers / apps wired
to that clock so expiry and eviction can be tested without sleeping.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from authsession.core.config import Settings
from authsession.core.security import TokenCodec
from authsession.main import create_app
from authsession.models.session import SessionRecord
from authsession.services.session_manager import SessionManager
from authsession.services.session_store import SessionStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> datetime:
        self._now += timedelta(**kwargs)
        return self._now


def make_record(
    session_id: str,
    user_id: str = "user-1",
    *,
    now: datetime,
    last_activity: datetime | None = None,
    lifetime: timedelta = timedelta(days=7),
    refresh_token: str | None = None,
) -> SessionRecord:
    return SessionRecord(
        session_id=session_id,
        user_id=user_id,
        email=f"{user_id}@example.com",
        role="student",
        created_at=now,
        last_activity=last_activity or now,
        expires_at=now + lifetime,
        refresh_token=refresh_token or f"refresh-{session_id}",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        SECRET_KEY="test-secret-key",
        ACCESS_TOKEN_EXPIRE_MINUTES=15,
        REFRESH_TOKEN_EXPIRE_DAYS=7,
        SESSION_SWEEP_INTERVAL_MINUTES=5,
        MAX_SESSIONS_PER_USER=5,
    )


@pytest.fixture
def codec(settings: Settings, clock: FakeClock) -> TokenCodec:
    return TokenCodec(
        settings.SECRET_KEY,
        clock,
        algorithm=settings.JWT_ALGORITHM,
        access_lifetime=settings.access_token_lifetime,
    )


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def manager(settings: Settings, clock: FakeClock) -> SessionManager:
    return SessionManager(settings, clock=clock)


@pytest.fixture
def app(settings: Settings, manager: SessionManager):
    return create_app(settings, session_manager=manager)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
