"""Shared test fixtures for contentsync."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from contentsync import create_app
from contentsync.content.store import InMemoryVersionStore
from contentsync.extensions import db


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryVersionStore:
    return InMemoryVersionStore(clock=clock)


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_token(app) -> str:
    return create_access_token(identity="admin-1", additional_claims={"role": "admin"})


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def viewer_headers(app) -> dict[str, str]:
    token = create_access_token(identity="viewer-1", additional_claims={"role": "viewer"})
    return {"Authorization": f"Bearer {token}"}
