"""
Tests for registration, login and the authorization guard.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from marketplace.data.seed import seed_admin
from marketplace.domain.errors import InvalidCredential, Unauthenticated
from marketplace.domain.schemas import Identity
from marketplace.services.auth_service import (
    hash_password,
    owner_or_admin,
    resolve_identity,
    verify_password,
)
from marketplace.utils.settings import JWT_ALGORITHM, SECRET_KEY
from tests.helpers import login, register_and_login


class TestRegister:
    def test_register_success(self, test_client: TestClient):
        response = test_client.post(
            "/register",
            json={
                "username": "alice",
                "password": "pw",
                "email": "alice@example.com",
                "name": "Alice",
                "surname": "Smith",
            },
        )

        assert response.status_code == 201
        assert response.json()["message"] == "User registered successfully"

    def test_missing_fields(self, test_client: TestClient):
        response = test_client.post("/register", json={"username": "alice", "password": "pw"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "MissingField"
        assert "email" in data["detail"]

    def test_duplicate_username(self, test_client: TestClient):
        register_and_login(test_client, "alice")

        response = test_client.post(
            "/register",
            json={
                "username": "alice",
                "password": "pw",
                "email": "other@example.com",
                "name": "A",
                "surname": "B",
            },
        )

        assert response.status_code == 409
        assert response.json()["error"] == "Conflict"

    def test_password_is_hashed(self, test_client: TestClient, db_session):
        from marketplace.repos.user_repo import UserRepo

        register_and_login(test_client, "alice", password="plain-text")

        stored = UserRepo(db_session).get_by_username("alice").password
        assert stored != "plain-text"
        assert verify_password("plain-text", stored)


class TestLogin:
    def test_login_returns_user_without_password(self, test_client: TestClient):
        register_and_login(test_client, "alice", password="pw1")

        response = test_client.post("/login", json={"username": "alice", "password": "pw1"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["token_type"] == "bearer"
        assert data["user"]["username"] == "alice"
        assert "password" not in data["user"]

    @pytest.mark.parametrize("username,password", [("alice", "wrong"), ("nobody", "pw1")])
    def test_bad_credentials(self, test_client: TestClient, username, password):
        register_and_login(test_client, "alice", password="pw1")

        response = test_client.post("/login", json={"username": username, "password": password})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"

    def test_missing_password(self, test_client: TestClient):
        response = test_client.post("/login", json={"username": "alice"})

        assert response.status_code == 400


class TestProfile:
    def test_get_and_update_profile(self, test_client: TestClient, buyer):
        me = test_client.get("/users/me", headers=buyer["headers"]).json()
        assert me["username"] == "buyer"

        response = test_client.put("/users/me", json={"bio": "hello", "age": 30}, headers=buyer["headers"])

        assert response.status_code == 200
        assert response.json()["bio"] == "hello"
        assert response.json()["age"] == 30
        assert response.json()["name"] == me["name"]


class TestResolveIdentity:
    def _token(self, **overrides) -> str:
        claims = {
            "sub": "7",
            "username": "bob",
            "is_admin": False,
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        }
        claims.update(overrides)
        return jwt.encode(claims, SECRET_KEY, algorithm=JWT_ALGORITHM)

    def test_valid_token(self):
        identity = resolve_identity(self._token())

        assert identity == Identity(id=7, username="bob", is_admin=False)

    @pytest.mark.parametrize("credential", [None, "", "   "])
    def test_missing_credential(self, credential):
        with pytest.raises(Unauthenticated):
            resolve_identity(credential)

    def test_garbage_token(self):
        with pytest.raises(InvalidCredential):
            resolve_identity("not-a-jwt")

    def test_expired_token(self):
        with pytest.raises(InvalidCredential):
            resolve_identity(self._token(exp=datetime.now(timezone.utc) - timedelta(minutes=1)))

    def test_wrong_signature(self):
        forged = jwt.encode({"sub": "7", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)}, "other-key", algorithm="HS256")

        with pytest.raises(InvalidCredential):
            resolve_identity(forged)

    def test_non_numeric_subject(self):
        with pytest.raises(InvalidCredential):
            resolve_identity(self._token(sub="bob"))

    def test_invalid_token_over_http(self, test_client: TestClient):
        response = test_client.get("/cart", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["error"] == "InvalidCredential"


class TestOwnerOrAdmin:
    def test_owner(self):
        assert owner_or_admin(Identity(id=1, username="a"), 1)

    def test_stranger(self):
        assert not owner_or_admin(Identity(id=2, username="b"), 1)

    def test_admin(self):
        assert owner_or_admin(Identity(id=2, username="root", is_admin=True), 1)


class TestSeedAdmin:
    def test_seed_creates_admin_once(self, test_client: TestClient, session_factory):
        assert seed_admin(session_factory, username="root", password="rootpw", email="root@example.com") is True
        assert seed_admin(session_factory, username="root", password="rootpw", email="root@example.com") is False

        admin = login(test_client, "root", "rootpw")
        me = test_client.get("/users/me", headers=admin["headers"]).json()
        assert me["is_admin"] is True
        assert me["role"] == "admin"

    def test_seed_skipped_without_credentials(self, session_factory):
        assert seed_admin(session_factory, username=None, password=None) is False

    def test_hash_roundtrip(self):
        hashed = hash_password("pw")
        assert verify_password("pw", hashed)
        assert not verify_password("other", hashed)
        assert not verify_password("pw", "not-a-bcrypt-hash")
