"""
Tests for the persistence gateway: transaction scope, error mapping, engine setup.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from marketplace.data.database import _normalize_url, transaction
from marketplace.data.models.user import UserModel
from marketplace.domain.errors import Conflict, NotFound, StorageError


def make_user(username: str) -> UserModel:
    return UserModel(
        username=username,
        password="x",
        email=f"{username}@example.com",
        name="N",
        surname="S",
    )


def count_users(db_session) -> int:
    return db_session.execute(select(func.count()).select_from(UserModel)).scalar_one()


class TestTransaction:
    def test_commits_on_success(self, db_session):
        with transaction(db_session):
            db_session.add(make_user("alice"))

        assert count_users(db_session) == 1

    def test_rolls_back_domain_error(self, db_session):
        with pytest.raises(NotFound):
            with transaction(db_session):
                db_session.add(make_user("alice"))
                db_session.flush()
                raise NotFound("nope")

        assert count_users(db_session) == 0

    def test_unique_violation_becomes_conflict(self, db_session):
        with transaction(db_session):
            db_session.add(make_user("alice"))

        with pytest.raises(Conflict):
            with transaction(db_session):
                db_session.add(make_user("alice"))

        assert count_users(db_session) == 1

    def test_database_failure_becomes_storage_error(self, db_session):
        with pytest.raises(StorageError) as exc_info:
            with transaction(db_session):
                db_session.add(make_user("alice"))
                db_session.flush()
                raise OperationalError("INSERT", {}, Exception("database is locked"))

        assert exc_info.value.status_code == 503
        assert count_users(db_session) == 0


class TestEngineSetup:
    def test_postgres_scheme_normalized(self):
        assert _normalize_url("postgres://u:p@h/db") == "postgresql://u:p@h/db"
        assert _normalize_url("sqlite://") == "sqlite://"

    def test_foreign_keys_enforced_on_sqlite(self, engine):
        with engine.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1


class TestHealth:
    def test_health(self, test_client: TestClient):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
