# routers/tasks.py
"""
Task API routes.

Role-based access:
- Agente: tasks assigned to itself, tasks on properties it owns
- Superadmin: every task

The assignee is never read from the request; it always follows the owner of
the task's property.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import CallerIdentity, require_role
from errors import NotFoundError, ValidationFailed
from models import Role
from schemas.common import PathId
from schemas.task import (
     TaskCreate,
     TaskAgentUpdate,
     TaskAdminUpdate,
     TaskResponse,
     TaskEnvelope,
     TaskListResponse,
)
from services import TaskService
from utils.serializers import serialize_task

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

agent_only = require_role(Role.AGENT)
admin_only = require_role(Role.SUPERADMIN)

TASK_NOT_FOUND = "Task not found"
PROPERTY_NOT_FOUND = "Property not found"


def _changes(payload) -> dict:
     changes = payload.model_dump(exclude_unset=True, exclude_none=True)
     if not changes:
          raise ValidationFailed("No valid fields provided for update")
     return changes


def _task_list(tasks) -> TaskListResponse:
     items = [serialize_task(task) for task in tasks]
     return TaskListResponse(tasks=items, total=len(items))


# ---------------------------------------------------------------------------
# Agente
# ---------------------------------------------------------------------------

@router.get("/agent", response_model=TaskListResponse, summary="List own tasks (agent)")
def list_tasks_by_agent(
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(agent_only),
):
     return _task_list(TaskService.get_all_for_agent(db, caller.id))


@router.post(
     "/agent",
     response_model=TaskEnvelope,
     status_code=status.HTTP_201_CREATED,
     summary="Create a task on an own property (agent)"
)
def create_task_by_agent(
     body: TaskCreate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(agent_only),
):
     """
     The property must belong to the caller. A property owned by someone
     else is reported exactly like a missing one.
     """
     outcome = TaskService.create_by_agent(db, body.model_dump(), caller.id)
     if not outcome:
          raise NotFoundError(PROPERTY_NOT_FOUND)
     db.commit()
     return TaskEnvelope(message="Task created successfully", task=serialize_task(outcome.value))


@router.get("/property/{property_id}", response_model=TaskListResponse, summary="List tasks of an own property (agent)")
def list_property_tasks_by_agent(
     property_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(agent_only),
):
     outcome = TaskService.get_by_property_for_agent(db, property_id, caller.id)
     if not outcome:
          raise NotFoundError(PROPERTY_NOT_FOUND)
     return _task_list(outcome.value)


@router.get("/agent/{task_id}", response_model=TaskResponse, summary="Get own task (agent)")
def get_task_by_agent(
     task_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(agent_only),
):
     outcome = TaskService.get_by_id_for_agent(db, task_id, caller.id)
     if not outcome:
          raise NotFoundError(TASK_NOT_FOUND)
     return serialize_task(outcome.value)


@router.put("/agent/{task_id}", response_model=TaskEnvelope, summary="Update own task (agent)")
def update_task_by_agent(
     task_id: PathId,
     body: TaskAgentUpdate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(agent_only),
):
     """Only title, description and isCompleted can be changed here."""
     outcome = TaskService.update_by_agent(db, task_id, _changes(body), caller.id)
     if not outcome:
          raise NotFoundError(TASK_NOT_FOUND)
     db.commit()
     return TaskEnvelope(message="Task updated successfully", task=serialize_task(outcome.value))


@router.delete("/agent/{task_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete own task (agent)")
def delete_task_by_agent(
     task_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(agent_only),
):
     if not TaskService.delete_by_agent(db, task_id, caller.id):
          raise NotFoundError(TASK_NOT_FOUND)
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Superadmin
# ---------------------------------------------------------------------------

@router.get("/admin", response_model=TaskListResponse, summary="List all tasks (superadmin)")
def list_tasks_by_admin(
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     return _task_list(TaskService.get_all(db))


@router.post(
     "/admin",
     response_model=TaskEnvelope,
     status_code=status.HTTP_201_CREATED,
     summary="Create a task on any property (superadmin)"
)
def create_task_by_admin(
     body: TaskCreate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     """The task is assigned to the property's current owner."""
     outcome = TaskService.create_by_admin(db, body.model_dump())
     if not outcome:
          raise NotFoundError(PROPERTY_NOT_FOUND)
     db.commit()
     return TaskEnvelope(message="Task created successfully", task=serialize_task(outcome.value))


@router.get("/admin/property/{property_id}", response_model=TaskListResponse, summary="List tasks of any property (superadmin)")
def list_property_tasks_by_admin(
     property_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     outcome = TaskService.get_by_property(db, property_id)
     if not outcome:
          raise NotFoundError(PROPERTY_NOT_FOUND)
     return _task_list(outcome.value)


@router.get("/admin/{task_id}", response_model=TaskResponse, summary="Get any task (superadmin)")
def get_task_by_admin(
     task_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     outcome = TaskService.get_by_id(db, task_id)
     if not outcome:
          raise NotFoundError(TASK_NOT_FOUND)
     return serialize_task(outcome.value)


@router.put("/admin/{task_id}", response_model=TaskEnvelope, summary="Update any task (superadmin)")
def update_task_by_admin(
     task_id: PathId,
     body: TaskAdminUpdate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     """
     Moving a task to another property reassigns it to that property's owner.
     If the target property does not exist the task is left untouched.
     """
     changes = _changes(body)
     outcome = TaskService.update_by_admin(db, task_id, changes)
     if not outcome:
          detail = "Task or property not found" if "property_id" in changes else TASK_NOT_FOUND
          raise NotFoundError(detail)
     db.commit()
     return TaskEnvelope(message="Task updated successfully", task=serialize_task(outcome.value))


@router.delete("/admin/{task_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete any task (superadmin)")
def delete_task_by_admin(
     task_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     if not TaskService.delete_by_admin(db, task_id):
          raise NotFoundError(TASK_NOT_FOUND)
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)
