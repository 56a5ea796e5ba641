# schemas/user.py
"""
Pydantic schemas for User API request/response validation.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from .common import CamelModel


class RoleEnum(str, Enum):
     """User role options."""
     AGENTE = "agente"
     SUPERADMIN = "superadmin"


def _lower_email(value: Optional[str]) -> Optional[str]:
     """Runs after EmailStr has validated the address."""
     return value.lower() if value is not None else value


class UserRegister(CamelModel):
     """Schema for public self-registration (role is always agente)."""
     name: str = Field(..., min_length=1, max_length=200)
     email: EmailStr
     password: str = Field(..., min_length=6, max_length=128)

     normalize_email = field_validator("email")(_lower_email)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Laura Gómez",
                    "email": "laura@inmobiliaria.com",
                    "password": "s3cret-pass"
               }
          }
     )


class UserCreate(UserRegister):
     """Schema for a superadmin creating a user with an explicit role."""
     role: RoleEnum = Field(..., description="Role of the new user")


class UserLogin(CamelModel):
     email: str = Field(..., min_length=1)
     password: str = Field(..., min_length=1)


class UserProfileUpdate(CamelModel):
     """Schema for a user updating their own profile. Role cannot be changed here."""
     name: Optional[str] = Field(None, min_length=1, max_length=200)
     email: Optional[EmailStr] = None
     password: Optional[str] = Field(None, min_length=6, max_length=128)

     normalize_email = field_validator("email")(_lower_email)


class UserAdminUpdate(UserProfileUpdate):
     """Schema for a superadmin updating any user."""
     role: Optional[RoleEnum] = None


class UserResponse(CamelModel):
     """Public view of a user. Never carries the password hash."""
     id: int
     name: str
     email: str
     role: RoleEnum
     created_at: datetime
     updated_at: datetime


class UserEnvelope(CamelModel):
     message: str
     user: UserResponse


class LoginResponse(CamelModel):
     token: str
     user: UserResponse


class UserListResponse(CamelModel):
     users: List[UserResponse]
     total: int
