"""
Bearer token gate and role gate.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from dependencies import CallerIdentity, get_current_user, require_role
from errors import ForbiddenError, UnauthorizedError
from models import Role
from services import create_access_token


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def _signed(payload: dict, secret: str = "test-secret") -> str:
    payload.setdefault("exp", datetime.now(timezone.utc) + timedelta(minutes=5))
    return jwt.encode(payload, secret, algorithm="HS256")


def test_valid_token_yields_identity(make_user):
    user = make_user(Role.SUPERADMIN)

    caller = get_current_user(_bearer(create_access_token(user)))

    assert caller == CallerIdentity(id=user.id, role=Role.SUPERADMIN)


def test_missing_token():
    with pytest.raises(UnauthorizedError) as excinfo:
        get_current_user(None)

    assert excinfo.value.detail == "Access denied. No token provided."


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        _signed({"id": 1, "role": "agente"}, secret="someone-else"),
        _signed({"id": 1, "role": "agente", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)}),
        _signed({"role": "agente"}),
        _signed({"id": 1}),
        _signed({"id": 1, "role": "landlord"}),
        _signed({"id": [1], "role": "agente"}),
        _signed({"id": 2**70, "role": "agente"}),
        _signed({"id": 0, "role": "agente"}),
        _signed({"id": "abc", "role": "agente"}),
    ],
    ids=[
        "garbage", "wrong-secret", "expired", "no-id", "no-role", "unknown-role",
        "bad-id-type", "oversized-id", "zero-id", "non-numeric-id",
    ],
)
def test_rejected_tokens_are_401(token):
    with pytest.raises(UnauthorizedError) as excinfo:
        get_current_user(_bearer(token))

    assert excinfo.value.status_code == 401


def test_expired_token_from_service(make_user):
    token = create_access_token(make_user(), expires_minutes=-1)

    with pytest.raises(UnauthorizedError):
        get_current_user(_bearer(token))


def test_role_gate_admits_matching_role():
    gate = require_role(Role.AGENT)
    caller = CallerIdentity(id=1, role=Role.AGENT)

    assert gate(caller) is caller


@pytest.mark.parametrize(
    "allowed, role",
    [(Role.SUPERADMIN, Role.AGENT), (Role.AGENT, Role.SUPERADMIN)],
)
def test_role_gate_is_exact_match(allowed, role):
    gate = require_role(allowed)

    with pytest.raises(ForbiddenError) as excinfo:
        gate(CallerIdentity(id=1, role=role))

    assert excinfo.value.status_code == 403


def test_role_gate_with_several_roles():
    gate = require_role(Role.AGENT, Role.SUPERADMIN)

    assert gate(CallerIdentity(id=2, role=Role.SUPERADMIN)).id == 2
