# routers/users.py
"""
User API routes.

- Public: register, login
- Any authenticated user: read / update / delete their own account (/me)
- Superadmin: full user management
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import CallerIdentity, get_current_user, require_role
from errors import NotFoundError, ValidationFailed
from models import Role
from schemas.common import PathId
from schemas.user import (
     UserRegister,
     UserCreate,
     UserLogin,
     UserProfileUpdate,
     UserAdminUpdate,
     UserResponse,
     UserEnvelope,
     LoginResponse,
     UserListResponse,
)
from services import AuthService, UserService
from utils.serializers import serialize_user

router = APIRouter(prefix="/api/users", tags=["users"])

admin_only = require_role(Role.SUPERADMIN)


def _changes(payload) -> dict:
     changes = payload.model_dump(exclude_unset=True, exclude_none=True)
     if not changes:
          raise ValidationFailed("No valid fields provided for update")
     return changes


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

@router.post(
     "/register",
     response_model=UserEnvelope,
     status_code=status.HTTP_201_CREATED,
     summary="Register as an agent"
)
def register_user(body: UserRegister, db: Session = Depends(get_session)):
     """
     Self-registration. The new user is always an **agente**, whatever role
     the request carries.
     """
     user = AuthService.register(db, body.name, body.email, body.password)
     db.commit()
     return UserEnvelope(message="User registered successfully", user=serialize_user(user))


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login_user(body: UserLogin, db: Session = Depends(get_session)):
     """Exchange email and password for a bearer token valid for one hour."""
     result = AuthService.login(db, body.email, body.password)
     return LoginResponse(token=result["token"], user=serialize_user(result["user"]))


# ---------------------------------------------------------------------------
# Self-service (any authenticated user)
# ---------------------------------------------------------------------------

@router.get("/me", response_model=UserResponse, summary="Get own profile")
def get_own_profile(
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(get_current_user),
):
     outcome = UserService.get_by_id(db, caller.id)
     if not outcome:
          raise NotFoundError("User not found")
     return serialize_user(outcome.value)


@router.put("/me", response_model=UserEnvelope, summary="Update own profile")
def update_own_profile(
     body: UserProfileUpdate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(get_current_user),
):
     """Update name, email or password. Roles can only be changed by a superadmin."""
     outcome = UserService.update_profile(db, caller.id, _changes(body))
     if not outcome:
          raise NotFoundError("User not found")
     db.commit()
     return UserEnvelope(message="Profile updated successfully", user=serialize_user(outcome.value))


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT, summary="Delete own account")
def delete_own_account(
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(get_current_user),
):
     if not UserService.delete(db, caller.id):
          raise NotFoundError("User not found")
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Superadmin
# ---------------------------------------------------------------------------

@router.post(
     "",
     response_model=UserEnvelope,
     status_code=status.HTTP_201_CREATED,
     summary="Create a user with any role"
)
def create_user(
     body: UserCreate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     user = AuthService.create_by_admin(db, body.name, body.email, body.password, body.role)
     db.commit()
     return UserEnvelope(message="User created successfully", user=serialize_user(user))


@router.get("", response_model=UserListResponse, summary="List users")
def list_users(
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     users = [serialize_user(user) for user in UserService.get_all(db)]
     return UserListResponse(users=users, total=len(users))


@router.get("/{user_id}", response_model=UserResponse, summary="Get user by ID")
def get_user(
     user_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     outcome = UserService.get_by_id(db, user_id)
     if not outcome:
          raise NotFoundError("User not found")
     return serialize_user(outcome.value)


@router.put("/{user_id}", response_model=UserEnvelope, summary="Update any user")
def update_user(
     user_id: PathId,
     body: UserAdminUpdate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     outcome = UserService.update_by_admin(db, user_id, _changes(body))
     if not outcome:
          raise NotFoundError("User not found")
     db.commit()
     return UserEnvelope(message="User updated successfully", user=serialize_user(outcome.value))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete any user")
def delete_user(
     user_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     """
     Delete a user. Refused with 409 while the user still owns properties.
     """
     if not UserService.delete(db, user_id):
          raise NotFoundError("User not found")
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)
