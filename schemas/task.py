# schemas/task.py
"""
Pydantic schemas for Task API request/response validation.

assignedTo never appears on input schemas: it is derived from the
property's owner by the service layer.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import CamelModel, RecordId
from .property import PropertyResponse
from .user import UserResponse


class TaskCreate(CamelModel):
     title: str = Field(..., min_length=1, max_length=255)
     description: str = Field(..., min_length=1)
     is_completed: bool = False
     property_id: RecordId = Field(..., alias="property", description="Property ID (must exist)")


class TaskAgentUpdate(CamelModel):
     """Agents may only touch the descriptive fields and the completion flag."""
     title: Optional[str] = Field(None, min_length=1, max_length=255)
     description: Optional[str] = Field(None, min_length=1)
     is_completed: Optional[bool] = None


class TaskAdminUpdate(TaskAgentUpdate):
     """Admins may also move the task to another property."""
     property_id: Optional[RecordId] = Field(None, alias="property")


class TaskResponse(CamelModel):
     id: int
     title: str
     description: str
     is_completed: bool
     property: PropertyResponse
     assigned_to: UserResponse
     created_at: datetime
     updated_at: datetime


class TaskEnvelope(CamelModel):
     message: str
     task: TaskResponse


class TaskListResponse(CamelModel):
     tasks: List[TaskResponse]
     total: int
