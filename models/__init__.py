# models/__init__.py
from .base import Base
from .user import User, Role
from .property import Property
from .task import Task

__all__ = [
     "Base",
     "User",
     "Role",
     "Property",
     "Task",
]
