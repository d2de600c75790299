"""Tests for application wiring: root endpoints, error envelopes and startup."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from edumarket.main import create_app


def test_root_lists_endpoints(client) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["courses"] == "/api/courses"


def test_healthz(client) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}


def test_unknown_route(client) -> None:
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route not found"}


def test_malformed_json_is_a_bad_request(client) -> None:
    response = client.post(
        "/api/auth/login", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_unhandled_error_becomes_500(settings, mongo_db) -> None:
    app = create_app(settings, database=mongo_db)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Server error"}


def test_upload_directories_are_created(settings, mongo_db, tmp_path) -> None:
    create_app(settings, database=mongo_db)
    create_app(settings, database=mongo_db)

    assert (tmp_path / "uploads" / "courses").is_dir()
    assert (tmp_path / "uploads" / "products").is_dir()


def test_startup_fails_fast_when_database_is_unreachable(settings) -> None:
    db = MagicMock()
    db.command = AsyncMock(side_effect=ConnectionError("no route to host"))
    fake_client = MagicMock()
    fake_client.__getitem__.return_value = db

    with patch("edumarket.main.create_client", return_value=fake_client):
        app = create_app(settings)
        with pytest.raises(Exception):
            with TestClient(app):
                pass

    fake_client.close.assert_called_once()
