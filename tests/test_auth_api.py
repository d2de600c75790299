"""HTTP tests for user registration, login, admin login and profile."""

import asyncio

import pytest
from bson import ObjectId

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, bearer
from edumarket.db.database import USERS
from edumarket.utils.hash_utils import hash_password


class TestRegister:
    def test_register_returns_profile_and_token(self, client) -> None:
        response = client.post(
            "/api/auth/register",
            json={"name": "Ann", "email": "Ann@Example.com", "password": "secret123"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "ann@example.com"
        assert body["role"] == "user"
        assert body["token"]
        assert ObjectId.is_valid(body["_id"])
        assert "password" not in body

    def test_password_is_stored_hashed(self, client, mongo_db, register_user) -> None:
        register_user(email="ann@example.com", password="secret123")

        stored = asyncio.run(mongo_db[USERS].find_one({"email": "ann@example.com"}))
        assert stored["password"].startswith("$argon2")

    @pytest.mark.parametrize("missing", ["name", "email", "password"])
    def test_missing_field_is_rejected(self, client, missing) -> None:
        payload = {"name": "Ann", "email": "ann@example.com", "password": "secret123"}
        payload.pop(missing)

        response = client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "All fields are required"}

    @pytest.mark.parametrize("email", ["boss@admin.com", "Boss@ADMIN.com"])
    def test_admin_domain_is_reserved(self, client, email) -> None:
        response = client.post(
            "/api/auth/register",
            json={"name": "Boss", "email": email, "password": "anything"},
        )

        assert response.status_code == 403
        assert "Cannot register with @admin.com email" in response.json()["message"]

    def test_duplicate_email_conflicts(self, client, register_user) -> None:
        register_user(email="ann@example.com")

        response = client.post(
            "/api/auth/register",
            json={"name": "Ann Again", "email": "ANN@example.com", "password": "other-pass"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "User already exists"

    def test_malformed_email_is_rejected(self, client) -> None:
        response = client.post(
            "/api/auth/register",
            json={"name": "Ann", "email": "not-an-email", "password": "secret123"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestLogin:
    def test_login_succeeds_with_valid_credentials(self, client, register_user) -> None:
        register_user(email="ann@example.com", password="secret123")

        response = client.post("/api/auth/login", json={"email": "ann@example.com", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["role"] == "user"
        assert response.json()["token"]

    def test_login_is_case_insensitive_on_email(self, client, register_user) -> None:
        register_user(email="ann@example.com", password="secret123")

        response = client.post("/api/auth/login", json={"email": " ANN@Example.com", "password": "secret123"})

        assert response.status_code == 200

    def test_wrong_password_is_unauthorized(self, client, register_user) -> None:
        register_user(email="ann@example.com", password="secret123")

        response = client.post("/api/auth/login", json={"email": "ann@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_unknown_user_is_unauthorized(self, client) -> None:
        response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "x"})

        assert response.status_code == 401

    def test_missing_fields(self, client) -> None:
        response = client.post("/api/auth/login", json={"email": "ann@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required"

    def test_admin_email_is_sent_to_admin_portal(self, client) -> None:
        response = client.post("/api/auth/login", json={"email": "x@admin.com", "password": "whatever"})

        assert response.status_code == 403
        assert response.json()["message"] == "Admin accounts must use the admin login portal"

    def test_existing_admin_cannot_use_regular_login(self, client, admin_token) -> None:
        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

        assert response.status_code == 403

    def test_corrupt_stored_hash_is_unauthorized(self, client, mongo_db) -> None:
        asyncio.run(
            mongo_db[USERS].insert_one(
                {"name": "Broken", "email": "broken@example.com", "password": "$argon2id$garbage", "role": "user"}
            )
        )

        response = client.post("/api/auth/login", json={"email": "broken@example.com", "password": "secret123"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_role_defaults_to_user_when_unset(self, client, mongo_db) -> None:
        asyncio.run(
            mongo_db[USERS].insert_one(
                {"name": "Old", "email": "old@example.com", "password": hash_password("secret123")}
            )
        )

        response = client.post("/api/auth/login", json={"email": "old@example.com", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["role"] == "user"


class TestAdminLogin:
    def _insert(self, mongo_db, email: str, role: str, password: str = "admin-pass") -> None:
        asyncio.run(
            mongo_db[USERS].insert_one(
                {"name": "Someone", "email": email, "password": hash_password(password), "role": role}
            )
        )

    def test_succeeds_when_every_condition_holds(self, client, mongo_db) -> None:
        self._insert(mongo_db, "chief@admin.com", "admin")

        response = client.post("/api/auth/admin/login", json={"email": "chief@admin.com", "password": "admin-pass"})

        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    def test_non_admin_domain_is_forbidden(self, client, mongo_db) -> None:
        self._insert(mongo_db, "chief@example.com", "admin")

        response = client.post(
            "/api/auth/admin/login", json={"email": "chief@example.com", "password": "admin-pass"}
        )

        assert response.status_code == 403
        assert "must use @admin.com email address" in response.json()["message"]

    def test_unknown_account_is_unauthorized(self, client) -> None:
        response = client.post("/api/auth/admin/login", json={"email": "ghost@admin.com", "password": "x"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_non_admin_role_is_forbidden(self, client, mongo_db) -> None:
        self._insert(mongo_db, "intern@admin.com", "user")

        response = client.post(
            "/api/auth/admin/login", json={"email": "intern@admin.com", "password": "admin-pass"}
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. This account is not authorized as admin."

    def test_wrong_password_is_unauthorized(self, client, mongo_db) -> None:
        self._insert(mongo_db, "chief@admin.com", "admin")

        response = client.post("/api/auth/admin/login", json={"email": "chief@admin.com", "password": "bad"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"


class TestProfile:
    def test_profile_returns_current_user(self, client, register_user) -> None:
        registered = register_user(email="ann@example.com")

        response = client.get("/api/auth/profile", headers=bearer(registered["token"]))

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == registered["_id"]
        assert body["email"] == "ann@example.com"
        assert "password" not in body

    def test_missing_token(self, client) -> None:
        response = client.get("/api/auth/profile")

        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, no token"

    def test_non_bearer_scheme(self, client) -> None:
        response = client.get("/api/auth/profile", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, no token"

    def test_invalid_token(self, client) -> None:
        response = client.get("/api/auth/profile", headers=bearer("garbage"))

        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, token failed"

    def test_token_for_deleted_user(self, client, mongo_db, register_user) -> None:
        registered = register_user(email="ann@example.com")
        asyncio.run(mongo_db[USERS].delete_one({"email": "ann@example.com"}))

        response = client.get("/api/auth/profile", headers=bearer(registered["token"]))

        assert response.status_code == 401
        assert response.json()["message"] == "User not found"

    def test_seller_token_does_not_resolve_a_user(self, client, register_seller) -> None:
        seller = register_seller()

        response = client.get("/api/auth/profile", headers=bearer(seller["token"]))

        assert response.status_code == 401
