# services/auth_service.py
"""
Authentication Service - credentials, password hashing and access tokens.

Passwords are bcrypt-hashed with a per-record random salt and a fixed cost
factor (BCRYPT_ROUNDS). Tokens are HS256 JWTs carrying {id, role} and expire
after JWT_EXPIRATION_MINUTES.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import config
from errors import ConfigurationError, DuplicateKeyError, InvalidCredentialsError
from models import Role, User

logger = logging.getLogger(__name__)

# Bcrypt
pwd_context = CryptContext(
     schemes=["bcrypt"],
     deprecated="auto",
     bcrypt__rounds=config.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
     return pwd_context.hash(password)


# Compared against when the email is unknown, so both login failures cost one bcrypt check
_UNKNOWN_USER_HASH = pwd_context.hash("unknown-user-placeholder")


def verify_password(password: str, password_hash: str) -> bool:
     return pwd_context.verify(password, password_hash)


def _jwt_secret() -> str:
     if not config.JWT_SECRET:
          raise ConfigurationError("JWT_SECRET is not configured")
     return config.JWT_SECRET


def create_access_token(user: User, expires_minutes: Optional[int] = None) -> str:
     """Issue a signed token carrying the user's id and role."""
     now = datetime.now(timezone.utc)
     minutes = config.JWT_EXPIRATION_MINUTES if expires_minutes is None else expires_minutes
     payload: Dict[str, Any] = {
          "id": user.id,
          "role": user.role.value,
          "iat": int(now.timestamp()),
          "exp": int((now + timedelta(minutes=minutes)).timestamp()),
     }
     return jwt.encode(payload, _jwt_secret(), algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
     """
     Verify signature and expiry and return the payload.

     Raises:
          JWTError: If the token is malformed, tampered with or expired
     """
     return jwt.decode(token, _jwt_secret(), algorithms=[config.JWT_ALGORITHM])


def normalize_email(email: str) -> str:
     return email.strip().lower()


class AuthService:
     """Service class for registration and login."""

     @staticmethod
     def register(db: Session, name: str, email: str, password: str) -> User:
          """
          Self-registration. The role is always agente, whatever the caller sent.

          Raises:
               DuplicateKeyError: If the email is already registered
          """
          return AuthService._create_user(db, name, email, password, Role.AGENT)

     @staticmethod
     def create_by_admin(db: Session, name: str, email: str, password: str, role: Role) -> User:
          """Admin-driven creation with an explicit role."""
          return AuthService._create_user(db, name, email, password, Role(getattr(role, "value", role)))

     @staticmethod
     def login(db: Session, email: str, password: str) -> Dict[str, Any]:
          """
          Check credentials and issue a token.

          Unknown email and wrong password raise the same error so callers
          cannot probe which accounts exist.

          Returns:
               {"token": str, "user": User}
          """
          user = db.scalars(select(User).where(User.email == normalize_email(email))).first()

          if user is None:
               verify_password(password, _UNKNOWN_USER_HASH)
               valid = False
          else:
               valid = verify_password(password, user.password_hash)

          if not valid:
               logger.warning("Failed login attempt")
               raise InvalidCredentialsError()

          token = create_access_token(user)
          logger.info("User %s logged in", user.id)
          return {"token": token, "user": user}

     @staticmethod
     def _create_user(db: Session, name: str, email: str, password: str, role: Role) -> User:
          user = User(
               name=name,
               email=normalize_email(email),
               password_hash=hash_password(password),
               role=role,
          )
          db.add(user)
          try:
               db.flush()  # Flush to surface the unique-email violation here
          except IntegrityError:
               db.rollback()
               raise DuplicateKeyError("email")

          logger.info("Created user %s with role %s", user.id, role.value)
          return user
