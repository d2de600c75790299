"""Pytest configuration and shared fixtures.

HTTP tests drive the real application through ``TestClient`` against an
in-memory ``mongomock-motor`` database; service tests use the same database
directly.
"""

import asyncio
from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from edumarket.core.config import Settings
from edumarket.main import create_app
from edumarket.seeds.create_admin import create_admin

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

ADMIN_EMAIL = "root@admin.com"
ADMIN_PASSWORD = "admin-pass-123"


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        MONGO_URL="mongodb://localhost:27017",
        MONGO_DB_NAME="edumarket_test",
        JWT_SECRET_KEY="test-secret-key-for-testing-only",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def mongo_db():
    """Fresh in-memory database per test."""
    return AsyncMongoMockClient()["edumarket_test"]


@pytest.fixture
def app(settings: Settings, mongo_db):
    return create_app(settings, database=mongo_db)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# Helper Fixtures
# =============================================================================


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client) -> Callable[..., Dict[str, Any]]:
    def _register(email: str = "student@example.com", password: str = "secret123", name: str = "Student"):
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def register_seller(client) -> Callable[..., Dict[str, Any]]:
    def _register(email: str = "teacher@edu.com", password: str = "secret123", **overrides):
        payload = {
            "name": "Jane Teacher",
            "email": email,
            "password": password,
            "confirmPassword": password,
            "phone": "+1-555-0100",
            "institutionName": "State University",
            "address": "1 Campus Way",
        }
        payload.update(overrides)
        response = client.post("/api/seller/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _register


@pytest.fixture
def admin_token(client, mongo_db, settings) -> str:
    asyncio.run(create_admin(mongo_db, settings, "Root", ADMIN_EMAIL, ADMIN_PASSWORD))
    response = client.post(
        "/api/auth/admin/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


def listing_fields(**overrides) -> Dict[str, str]:
    fields = {
        "title": "Intro to Python",
        "name": "python-101",
        "authorName": "Jane Teacher",
        "description": "Learn the basics of Python programming.",
        "price": "49.99",
        "category": "Programming",
    }
    fields.update(overrides)
    return fields


def image_file(filename: str = "cover.png", content: bytes = PNG_BYTES, content_type: str = "image/png"):
    return {"image": (filename, content, content_type)}


@pytest.fixture
def create_listing(client) -> Callable[..., Dict[str, Any]]:
    def _create(kind: str, token: str, **overrides):
        response = client.post(
            f"/api/{kind}",
            data=listing_fields(**overrides),
            files=image_file(),
            headers=bearer(token),
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
