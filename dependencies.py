# dependencies.py
"""
Authentication and role gates for routes.

get_current_user turns "Authorization: Bearer <token>" into a CallerIdentity.
Every failure (no header, wrong scheme, bad signature, expired token,
payload without id/role, id outside the record id range, role outside the
Role enum) is the same 401. A well-formed token carrying an unknown role is
rejected here rather than left for require_role to answer with 403: Role is a
closed set, so such a token was not issued by this service.

require_role(...) runs after get_current_user and answers 403 when the
caller's role is not one of the allowed roles. Matching is exact: a
superadmin does not pass an agente-only gate.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from errors import ForbiddenError, UnauthorizedError
from models import Role
from schemas.common import MAX_RECORD_ID
from services.auth_service import decode_access_token

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CallerIdentity:
     id: int
     role: Role


def _identity_from_payload(payload: Any) -> CallerIdentity:
     if not isinstance(payload, dict) or "id" not in payload or "role" not in payload:
          raise ValueError("token payload is missing id or role")
     user_id = payload["id"]
     if isinstance(user_id, bool) or not isinstance(user_id, (int, str)):
          raise ValueError("token id has an unexpected type")
     user_id = int(user_id)
     if not 0 < user_id <= MAX_RECORD_ID:
          raise ValueError("token id is out of range")
     return CallerIdentity(id=user_id, role=Role(payload["role"]))


def get_current_user(
     credentials: HTTPAuthorizationCredentials = Depends(bearer),
) -> CallerIdentity:
     """Dependency that returns the authenticated caller from the JWT."""
     if credentials is None or not credentials.credentials:
          raise UnauthorizedError("Access denied. No token provided.")

     try:
          payload = decode_access_token(credentials.credentials)
          return _identity_from_payload(payload)
     except (JWTError, ValueError, TypeError) as exc:
          logger.warning("Rejected bearer token: %s", type(exc).__name__)
          raise UnauthorizedError()


def require_role(*allowed: Role) -> Callable[..., CallerIdentity]:
     """Build a dependency that admits only callers holding one of the given roles."""
     allowed_roles = frozenset(allowed)

     def role_gate(caller: CallerIdentity = Depends(get_current_user)) -> CallerIdentity:
          if caller.role not in allowed_roles:
               logger.info("User %s with role %s refused by role gate", caller.id, caller.role.value)
               raise ForbiddenError("Access denied. Insufficient permissions.")
          return caller

     return role_gate
