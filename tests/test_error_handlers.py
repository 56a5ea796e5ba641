"""
Boundary error mapping.
"""
import pytest
from fastapi.testclient import TestClient

import config
from errors import ConflictError
from main import create_app


@pytest.fixture
def failing_client(database):
    app = create_app(database)

    @app.get("/boom")
    def boom():
        raise RuntimeError("database exploded")

    @app.get("/conflict")
    def conflict():
        raise ConflictError("already taken")

    return TestClient(app, raise_server_exceptions=False)


def test_health(client):
    response = client.get("/api")

    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_app_error_keeps_status_and_detail(failing_client):
    response = failing_client.get("/conflict")

    assert response.status_code == 409
    assert response.json() == {"detail": "already taken"}


def test_unhandled_error_outside_production_includes_stack(failing_client):
    response = failing_client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["detail"] == "Internal server error"
    assert "database exploded" in body["stack"]


def test_unhandled_error_in_production_hides_stack(failing_client, monkeypatch):
    monkeypatch.setattr(config, "APP_ENV", "production")

    body = failing_client.get("/boom").json()

    assert body == {"detail": "Internal server error"}


def test_missing_jwt_secret_is_500(failing_client, monkeypatch):
    monkeypatch.setattr(config, "JWT_SECRET", None)

    response = failing_client.get("/api/users/me", headers={"Authorization": "Bearer abc.def.ghi"})

    assert response.status_code == 500
