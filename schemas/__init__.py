# schemas/__init__.py
from .common import CamelModel, MessageResponse, RecordId, PathId, MAX_RECORD_ID
from .user import (
     RoleEnum,
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
from .property import (
     PropertyCreate,
     PropertyAdminCreate,
     PropertyUpdate,
     PropertyAdminUpdate,
     PropertyResponse,
     PropertyEnvelope,
     PropertyListResponse,
)
from .task import (
     TaskCreate,
     TaskAgentUpdate,
     TaskAdminUpdate,
     TaskResponse,
     TaskEnvelope,
     TaskListResponse,
)

__all__ = [
     "CamelModel",
     "MessageResponse",
     "RecordId",
     "PathId",
     "MAX_RECORD_ID",
     "RoleEnum",
     "UserRegister",
     "UserCreate",
     "UserLogin",
     "UserProfileUpdate",
     "UserAdminUpdate",
     "UserResponse",
     "UserEnvelope",
     "LoginResponse",
     "UserListResponse",
     "PropertyCreate",
     "PropertyAdminCreate",
     "PropertyUpdate",
     "PropertyAdminUpdate",
     "PropertyResponse",
     "PropertyEnvelope",
     "PropertyListResponse",
     "TaskCreate",
     "TaskAgentUpdate",
     "TaskAdminUpdate",
     "TaskResponse",
     "TaskEnvelope",
     "TaskListResponse",
]
