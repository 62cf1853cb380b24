"""
Shared fixtures.

The app runs against in-memory SQLite (one shared connection), the Redis
checkout lock is replaced by an in-process fake and Celery runs tasks eagerly,
so the suite needs neither Postgres, Redis nor a broker.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["SECRET_KEY"] = "test-secret"
os.environ.pop("ADMIN_USERNAME", None)
os.environ.pop("ADMIN_PASSWORD", None)

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from marketplace.api.deps import get_lock_service
from marketplace.data.database import Base, build_engine, get_db, init_db
from marketplace.main import app
from tests.helpers import register_and_login


class FakeLockService:
    """Same contract as LockService, backed by a dict."""

    def __init__(self):
        self.locks = {}

    def acquire_checkout_lock(self, user_id: int, ttl: int) -> str | None:
        if user_id in self.locks:
            return None
        token = uuid.uuid4().hex
        self.locks[user_id] = token
        return token

    def release_checkout_lock(self, user_id: int, token: str) -> bool:
        if self.locks.get(user_id) == token:
            del self.locks[user_id]
            return True
        return False


@pytest.fixture
def engine():
    test_engine = build_engine("sqlite://")
    init_db(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def test_client(session_factory, lock_service):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def seller(test_client):
    return register_and_login(test_client, "seller")


@pytest.fixture
def buyer(test_client):
    return register_and_login(test_client, "buyer")
