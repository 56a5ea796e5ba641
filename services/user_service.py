# services/user_service.py
"""
User Service - profile management and the user deletion guard.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import ConflictError, DuplicateKeyError
from models import Property, Role, User
from .auth_service import hash_password, normalize_email
from .outcome import Outcome

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "email", "password")
ADMIN_FIELDS = PROFILE_FIELDS + ("role",)


class UserService:
     """Service class for user-related business logic."""

     @staticmethod
     def get_all(db: Session) -> List[User]:
          return list(db.scalars(select(User).order_by(User.id)))

     @staticmethod
     def get_by_id(db: Session, user_id: int) -> Outcome[User]:
          user = db.get(User, user_id)
          if user is None:
               return Outcome.not_found()
          return Outcome.ok(user)

     @staticmethod
     def update_profile(db: Session, user_id: int, changes: Dict[str, Any]) -> Outcome[User]:
          """
          Update the caller's own profile. A role in the changes is ignored:
          only an admin can change roles.
          """
          return UserService._apply_changes(db, user_id, changes, PROFILE_FIELDS)

     @staticmethod
     def update_by_admin(db: Session, user_id: int, changes: Dict[str, Any]) -> Outcome[User]:
          return UserService._apply_changes(db, user_id, changes, ADMIN_FIELDS)

     @staticmethod
     def delete(db: Session, user_id: int) -> Outcome[User]:
          """
          Delete a user that owns no properties.

          Tasks need no separate check: they cannot outlive their property
          and are always assigned to its owner.

          Raises:
               ConflictError: If any property still references the user as owner
          """
          owns_property = db.scalars(
               select(Property.id).where(Property.owner_id == user_id).limit(1)
          ).first()
          if owns_property is not None:
               logger.info("Refused to delete user %s: still owns properties", user_id)
               raise ConflictError(
                    "Cannot delete user: they still own properties. "
                    "Delete or reassign their properties first."
               )

          user = db.get(User, user_id)
          if user is None:
               return Outcome.not_found()

          db.delete(user)
          db.flush()
          logger.info("Deleted user %s", user_id)
          return Outcome.ok(user)

     @staticmethod
     def _apply_changes(db: Session, user_id: int, changes: Dict[str, Any], allowed: tuple) -> Outcome[User]:
          user = db.get(User, user_id)
          if user is None:
               return Outcome.not_found()

          for field, value in changes.items():
               if field not in allowed or value is None:
                    continue
               if field == "password":
                    user.password_hash = hash_password(value)
               elif field == "email":
                    user.email = normalize_email(value)
               elif field == "role":
                    user.role = Role(getattr(value, "value", value))
               else:
                    setattr(user, field, value)

          try:
               db.flush()
          except IntegrityError:
               db.rollback()
               raise DuplicateKeyError("email")

          db.refresh(user)
          return Outcome.ok(user)
