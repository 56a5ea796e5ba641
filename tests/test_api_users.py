"""
User endpoints: registration, login, self-service and admin management.
"""
import pytest

from models import Role


def test_register_creates_agent_even_if_role_sent(client):
    response = client.post(
        "/api/users/register",
        json={"name": "Laura", "email": "Laura@Inmobiliaria.com", "password": "secret123", "role": "superadmin"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["role"] == "agente"
    assert body["user"]["email"] == "laura@inmobiliaria.com"
    assert "password" not in body["user"]


def test_register_duplicate_email(client, agent):
    response = client.post(
        "/api/users/register",
        json={"name": "Copy", "email": agent.email.upper(), "password": "secret123"},
    )

    assert response.status_code == 409
    assert agent.email not in response.json()["detail"]


def test_register_validation(client):
    response = client.post("/api/users/register", json={"name": "Laura", "email": "laura@x.com", "password": "123"})

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid request data"
    assert any(error.startswith("password") for error in body["errors"])


def test_login_flow(client, make_user):
    user = make_user(email="laura@inmobiliaria.com", password="secret123")

    response = client.post("/api/users/login", json={"email": "laura@inmobiliaria.com", "password": "secret123"})

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == user.id
    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "laura@inmobiliaria.com"


def test_login_failures_look_the_same(client, make_user):
    make_user(email="laura@inmobiliaria.com", password="secret123")

    wrong_password = client.post("/api/users/login", json={"email": "laura@inmobiliaria.com", "password": "nope"})
    unknown_user = client.post("/api/users/login", json={"email": "ghost@inmobiliaria.com", "password": "secret123"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"detail": "Invalid credentials"}


def test_me_requires_token(client):
    response = client.get("/api/users/me")

    assert response.status_code == 401
    assert response.json()["detail"] == "Access denied. No token provided."


def test_me_with_bad_token(client):
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not.a.token"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_update_own_profile_cannot_change_role(client, agent, auth):
    response = client.put("/api/users/me", json={"name": "Nuevo", "role": "superadmin"}, headers=auth(agent))

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Nuevo"
    assert response.json()["user"]["role"] == "agente"


def test_update_own_profile_without_fields(client, agent, auth):
    response = client.put("/api/users/me", json={}, headers=auth(agent))

    assert response.status_code == 400


def test_delete_own_account(client, agent, auth):
    headers = auth(agent)

    assert client.delete("/api/users/me", headers=headers).status_code == 204
    assert client.get("/api/users/me", headers=headers).status_code == 404


def test_admin_endpoints_reject_agents(client, agent, auth):
    response = client.get("/api/users", headers=auth(agent))

    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied. Insufficient permissions."


def test_admin_creates_and_lists_users(client, admin, auth):
    created = client.post(
        "/api/users",
        json={"name": "Boss 2", "email": "boss2@inmobiliaria.com", "password": "secret123", "role": "superadmin"},
        headers=auth(admin),
    )
    listing = client.get("/api/users", headers=auth(admin))

    assert created.status_code == 201
    assert created.json()["user"]["role"] == "superadmin"
    assert listing.json()["total"] == 2


def test_admin_updates_role(client, admin, agent, auth):
    response = client.put(f"/api/users/{agent.id}", json={"role": "superadmin"}, headers=auth(admin))

    assert response.status_code == 200
    assert response.json()["user"]["role"] == Role.SUPERADMIN.value


def test_admin_get_missing_user(client, admin, auth):
    assert client.get("/api/users/999", headers=auth(admin)).status_code == 404


def test_admin_get_user_with_malformed_id(client, admin, auth):
    response = client.get("/api/users/not-a-number", headers=auth(admin))

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid identifier format"


def test_delete_guard_over_http(client, admin, agent, auth, make_property):
    make_property(agent)

    response = client.delete(f"/api/users/{agent.id}", headers=auth(admin))

    assert response.status_code == 409
    assert "own properties" in response.json()["detail"]
    assert client.get(f"/api/users/{agent.id}", headers=auth(admin)).status_code == 200


@pytest.mark.parametrize("email", ["a@@b", "x@y", "no spaces@ex ample.com", "@@x@", "plain"])
def test_register_rejects_malformed_email(client, email):
    response = client.post("/api/users/register", json={"name": "Laura", "email": email, "password": "secret123"})

    assert response.status_code == 400
    assert any(error.startswith("email") for error in response.json()["errors"])


def test_profile_update_rejects_malformed_email(client, agent, auth):
    response = client.put("/api/users/me", json={"email": "x@y"}, headers=auth(agent))

    assert response.status_code == 400


def test_admin_user_routes_reject_oversized_id(client, admin, auth):
    huge = 2**70

    for method in ("get", "delete"):
        response = getattr(client, method)(f"/api/users/{huge}", headers=auth(admin))
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid identifier format"
    assert client.put(f"/api/users/{huge}", json={"name": "x"}, headers=auth(admin)).status_code == 400
    assert client.get("/api/users/0", headers=auth(admin)).status_code == 400
