# services/task_service.py
"""
Task Service - maintenance tasks attached to properties.

assigned_to_id is never taken from the caller. It is set to the owner of the
task's property when the task is created and recomputed whenever the task
moves to another property.

Agent-scoped lookups combine the lookup key with the caller identity in a
single predicate, so a record that belongs to someone else is reported the
same way as a record that does not exist.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy import delete, exists, select, update
from sqlalchemy.orm import Session, selectinload

from database import forget
from errors import ValidationFailed
from models import Property, Task
from .outcome import Outcome, classify_miss

logger = logging.getLogger(__name__)

AGENT_FIELDS = ("title", "description", "is_completed")
ADMIN_FIELDS = AGENT_FIELDS + ("property_id",)


def _only(changes: Dict[str, Any], allowed: tuple) -> Dict[str, Any]:
     return {key: value for key, value in changes.items() if key in allowed and value is not None}


def _populated():
     """Task select with its property and assignee loaded (the property's owner stays an ID)."""
     return select(Task).options(
          selectinload(Task.property),
          selectinload(Task.assigned_to),
     )


class TaskService:
     """Service class for task-related business logic."""

     # ------------------------------------------------------------------
     # Creation
     # ------------------------------------------------------------------

     @staticmethod
     def create_by_agent(db: Session, data: Dict[str, Any], agent_id: int) -> Outcome[Task]:
          """
          Create a task on one of the agent's own properties.

          The property must exist AND be owned by the agent (one query);
          otherwise the outcome is a miss, reported to clients as
          "property not found".
          """
          property_id = data.get("property_id")
          if property_id is None:
               raise ValidationFailed("property is required")
          owned = db.scalars(
               select(Property).where(Property.id == property_id, Property.owner_id == agent_id)
          ).one_or_none()

          if owned is None:
               outcome = classify_miss(db, Property, property_id)
               logger.info("Agent %s could not add a task to property %s (%s)", agent_id, property_id, outcome.miss.value)
               return outcome

          task = Task(
               **_only(data, AGENT_FIELDS),
               property_id=owned.id,
               assigned_to_id=agent_id,  # equals owned.owner_id by the filter above
          )
          db.add(task)
          db.flush()

          logger.info("Agent %s created task %s on property %s", agent_id, task.id, owned.id)
          return Outcome.ok(task)

     @staticmethod
     def create_by_admin(db: Session, data: Dict[str, Any]) -> Outcome[Task]:
          """Create a task on any property, assigned to that property's current owner."""
          property_id = data.get("property_id")
          if property_id is None:
               raise ValidationFailed("property is required")
          target = db.get(Property, property_id)
          if target is None:
               return Outcome.not_found()

          task = Task(
               **_only(data, AGENT_FIELDS),
               property_id=target.id,
               assigned_to_id=target.owner_id,
          )
          db.add(task)
          db.flush()

          logger.info("Admin created task %s on property %s for user %s", task.id, target.id, target.owner_id)
          return Outcome.ok(task)

     # ------------------------------------------------------------------
     # Updates
     # ------------------------------------------------------------------

     @staticmethod
     def update_by_agent(db: Session, task_id: int, changes: Dict[str, Any], agent_id: int) -> Outcome[Task]:
          """
          Update title, description or completion of a task assigned to the agent.
          property and assigned_to are dropped from the changes.
          """
          values = _only(changes, AGENT_FIELDS)
          if not values:
               raise ValidationFailed("No valid fields provided for update")

          updated = db.scalars(
               update(Task)
               .where(Task.id == task_id, Task.assigned_to_id == agent_id)
               .values(**values)
               .returning(Task)
          ).one_or_none()

          if updated is None:
               outcome = classify_miss(db, Task, task_id)
               logger.info("Agent %s could not update task %s (%s)", agent_id, task_id, outcome.miss.value)
               return outcome

          db.refresh(updated)
          return Outcome.ok(updated)

     @staticmethod
     def update_by_admin(db: Session, task_id: int, changes: Dict[str, Any]) -> Outcome[Task]:
          """
          Update any task. Moving it to another property reassigns it to that
          property's owner; if the new property does not exist nothing is
          written and the outcome is a miss.
          """
          values = _only(changes, ADMIN_FIELDS)
          if not values:
               raise ValidationFailed("No valid fields provided for update")

          if "property_id" in values:
               target = db.get(Property, values["property_id"])
               if target is None:
                    logger.info("Task %s not moved: property %s does not exist", task_id, values["property_id"])
                    return Outcome.not_found()
               values["assigned_to_id"] = target.owner_id

          updated = db.scalars(
               update(Task)
               .where(Task.id == task_id)
               .values(**values)
               .returning(Task)
          ).one_or_none()

          if updated is None:
               return Outcome.not_found()

          db.refresh(updated)
          return Outcome.ok(updated)

     # ------------------------------------------------------------------
     # Deletes
     # ------------------------------------------------------------------

     @staticmethod
     def delete_by_agent(db: Session, task_id: int, agent_id: int) -> Outcome[Task]:
          deleted = db.scalars(
               delete(Task)
               .where(Task.id == task_id, Task.assigned_to_id == agent_id)
               .returning(Task)
          ).one_or_none()

          if deleted is None:
               outcome = classify_miss(db, Task, task_id)
               logger.info("Agent %s could not delete task %s (%s)", agent_id, task_id, outcome.miss.value)
               return outcome

          forget(db, deleted)
          logger.info("Agent %s deleted task %s", agent_id, task_id)
          return Outcome.ok(deleted)

     @staticmethod
     def delete_by_admin(db: Session, task_id: int) -> Outcome[Task]:
          deleted = db.scalars(
               delete(Task).where(Task.id == task_id).returning(Task)
          ).one_or_none()

          if deleted is None:
               return Outcome.not_found()

          forget(db, deleted)
          logger.info("Admin deleted task %s", task_id)
          return Outcome.ok(deleted)

     # ------------------------------------------------------------------
     # Queries
     # ------------------------------------------------------------------

     @staticmethod
     def get_all(db: Session) -> List[Task]:
          return list(db.scalars(_populated().order_by(Task.id)))

     @staticmethod
     def get_all_for_agent(db: Session, agent_id: int) -> List[Task]:
          return list(db.scalars(_populated().where(Task.assigned_to_id == agent_id).order_by(Task.id)))

     @staticmethod
     def get_by_id(db: Session, task_id: int) -> Outcome[Task]:
          task = db.scalars(_populated().where(Task.id == task_id)).one_or_none()
          if task is None:
               return Outcome.not_found()
          return Outcome.ok(task)

     @staticmethod
     def get_by_id_for_agent(db: Session, task_id: int, agent_id: int) -> Outcome[Task]:
          task = db.scalars(
               _populated().where(Task.id == task_id, Task.assigned_to_id == agent_id)
          ).one_or_none()
          if task is None:
               return classify_miss(db, Task, task_id)
          return Outcome.ok(task)

     @staticmethod
     def get_by_property(db: Session, property_id: int) -> Outcome[List[Task]]:
          """Tasks of any property; a miss if the property does not exist."""
          if db.get(Property, property_id) is None:
               return Outcome.not_found()
          tasks = db.scalars(_populated().where(Task.property_id == property_id).order_by(Task.id))
          return Outcome.ok(list(tasks))

     @staticmethod
     def get_by_property_for_agent(db: Session, property_id: int, agent_id: int) -> Outcome[List[Task]]:
          """Tasks of a property the agent owns; a miss if it does not exist or is not theirs."""
          owned = db.scalars(
               select(Property.id).where(Property.id == property_id, Property.owner_id == agent_id)
          ).one_or_none()
          if owned is None:
               return classify_miss(db, Property, property_id)

          tasks = db.scalars(_populated().where(Task.property_id == property_id).order_by(Task.id))
          return Outcome.ok(list(tasks))

     # ------------------------------------------------------------------
     # Maintenance
     # ------------------------------------------------------------------

     @staticmethod
     def purge_orphaned_tasks(db: Session) -> int:
          """Delete tasks whose property no longer exists. Returns how many were removed."""
          removed = db.execute(
               delete(Task)
               .where(~exists().where(Property.id == Task.property_id))
               .execution_options(synchronize_session=False)
          ).rowcount
          if removed:
               logger.warning("Purged %s orphaned task(s)", removed)
          return removed

     @staticmethod
     def realign_assignments(db: Session) -> int:
          """Reset assigned_to_id to the property owner where the two have drifted apart."""
          owner_of_property = (
               select(Property.owner_id)
               .where(Property.id == Task.property_id)
               .scalar_subquery()
          )
          realigned = db.execute(
               update(Task)
               .where(Task.assigned_to_id != owner_of_property)
               .values(assigned_to_id=owner_of_property)
               .execution_options(synchronize_session=False)
          ).rowcount
          if realigned:
               logger.warning("Realigned %s task assignment(s) with their property owner", realigned)
          return realigned
