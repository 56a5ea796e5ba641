# services/__init__.py
from .outcome import Outcome, Miss
from .auth_service import (
     AuthService,
     hash_password,
     verify_password,
     create_access_token,
     decode_access_token,
)
from .user_service import UserService
from .property_service import PropertyService
from .task_service import TaskService

__all__ = [
     "Outcome",
     "Miss",
     "AuthService",
     "hash_password",
     "verify_password",
     "create_access_token",
     "decode_access_token",
     "UserService",
     "PropertyService",
     "TaskService",
]
