import random
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mindcare.api.dependencies import get_reply_selector
from mindcare.core.responses import ReplySelector
from mindcare.db.database import get_db
from mindcare.db.kv_store import KVStore
from mindcare.db.models import Base
from mindcare.main import app
from mindcare.schemas.user import UserProfile
from mindcare.services.directory import save_profile


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def store(session_factory):
    db = session_factory()
    try:
        yield KVStore(db)
    finally:
        db.close()


@pytest.fixture
def selector():
    return ReplySelector(random.Random(7))


@pytest.fixture
def client(session_factory):
    """Test client wired to the in-memory database and a seeded reply picker."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reply_selector] = lambda: ReplySelector(random.Random(7))
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def add_profile(store):
    """Insert a profile directly; created_at controls counsellor ordering."""
    def _add(user_id, role="student", name=None, created_at=None):
        profile = UserProfile(
            id=user_id,
            email=f"{user_id}@campus.test",
            name=name or user_id.title(),
            role=role,
            created_at=created_at or datetime.now(timezone.utc),
        )
        save_profile(store, profile)
        return profile
    return _add


def signup(client, email, role="student", name="Test User", password="s3cure-pass"):
    """Sign up through the API; returns (auth headers, profile json)."""
    resp = client.post("/auth/signup", json={"email": email, "password": password, "name": name, "role": role})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    return {"Authorization": f"Bearer {data['accessToken']}"}, data["profile"]


def items_for(total, count):
    """Item scores in [0, 3] that add up to total."""
    return [min(3, max(0, total - 3 * i)) for i in range(count)]
