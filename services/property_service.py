# services/property_service.py
"""
Property Service - business rules for listings.

Ownership rules:
- An agent creates properties for itself and can only modify or delete its own.
  Both checks run inside one filtered statement (id AND owner), so a property
  owned by someone else looks exactly like a missing one.
- A superadmin can create properties for any user and modify or delete any
  property, including reassigning its owner.

Deleting a property deletes its tasks in the same transaction.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, selectinload

from database import forget
from errors import ValidationFailed
from models import Property, Task, User
from .outcome import Outcome, classify_miss

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
     "title",
     "description",
     "price",
     "location",
     "bedrooms",
     "bathrooms",
     "area",
     "image_urls",
)


def _only(changes: Dict[str, Any], allowed: tuple) -> Dict[str, Any]:
     return {key: value for key, value in changes.items() if key in allowed and value is not None}


def _require_user(db: Session, user_id: int) -> None:
     if db.get(User, user_id) is None:
          raise ValidationFailed(f"Owner with ID {user_id} does not exist")


class PropertyService:
     """Service class for property-related business logic."""

     @staticmethod
     def create_by_agent(db: Session, data: Dict[str, Any], agent_id: int) -> Property:
          """Create a property owned by the calling agent. Any owner in data is ignored."""
          values = _only(data, EDITABLE_FIELDS)
          new_property = Property(**values, owner_id=agent_id)
          db.add(new_property)
          db.flush()  # Flush to get the ID without committing

          logger.info("Agent %s created property %s", agent_id, new_property.id)
          return new_property

     @staticmethod
     def create_by_admin(db: Session, data: Dict[str, Any]) -> Property:
          """
          Create a property for an explicit owner.

          Raises:
               ValidationFailed: If no owner is given or it does not reference a user
          """
          owner_id = data.get("owner_id")
          if owner_id is None:
               raise ValidationFailed("owner is required")
          _require_user(db, owner_id)

          values = _only(data, EDITABLE_FIELDS)
          new_property = Property(**values, owner_id=owner_id)
          db.add(new_property)
          db.flush()

          logger.info("Admin created property %s for owner %s", new_property.id, owner_id)
          return new_property

     @staticmethod
     def update_by_agent(db: Session, property_id: int, changes: Dict[str, Any], agent_id: int) -> Outcome[Property]:
          """Update a property only if it exists AND belongs to the agent (one statement)."""
          values = _only(changes, EDITABLE_FIELDS)
          if not values:
               raise ValidationFailed("No valid fields provided for update")

          updated = db.scalars(
               update(Property)
               .where(Property.id == property_id, Property.owner_id == agent_id)
               .values(**values)
               .returning(Property)
          ).one_or_none()

          if updated is None:
               outcome = classify_miss(db, Property, property_id)
               logger.info("Agent %s could not update property %s (%s)", agent_id, property_id, outcome.miss.value)
               return outcome

          db.refresh(updated)
          return Outcome.ok(updated)

     @staticmethod
     def update_by_admin(db: Session, property_id: int, changes: Dict[str, Any]) -> Outcome[Property]:
          """
          Update any property. When the owner changes, every task of the
          property is reassigned to the new owner.

          Raises:
               ValidationFailed: If the new owner does not reference a user
          """
          values = _only(changes, EDITABLE_FIELDS + ("owner_id",))
          if not values:
               raise ValidationFailed("No valid fields provided for update")

          new_owner_id = values.get("owner_id")
          if new_owner_id is not None:
               _require_user(db, new_owner_id)

          updated = db.scalars(
               update(Property)
               .where(Property.id == property_id)
               .values(**values)
               .returning(Property)
          ).one_or_none()

          if updated is None:
               return Outcome.not_found()

          if new_owner_id is not None:
               realigned = db.execute(
                    update(Task)
                    .where(Task.property_id == property_id)
                    .values(assigned_to_id=new_owner_id)
                    .execution_options(synchronize_session=False)
               ).rowcount
               db.expire_all()
               logger.info(
                    "Property %s reassigned to user %s; %s task(s) reassigned",
                    property_id, new_owner_id, realigned,
               )

          db.refresh(updated)
          return Outcome.ok(updated)

     @staticmethod
     def delete_by_agent(db: Session, property_id: int, agent_id: int) -> Outcome[Property]:
          """Delete a property only if it exists AND belongs to the agent; its tasks go with it."""
          deleted = db.scalars(
               delete(Property)
               .where(Property.id == property_id, Property.owner_id == agent_id)
               .returning(Property)
          ).one_or_none()

          if deleted is None:
               outcome = classify_miss(db, Property, property_id)
               logger.info("Agent %s could not delete property %s (%s)", agent_id, property_id, outcome.miss.value)
               return outcome

          forget(db, deleted)
          PropertyService._delete_tasks_of(db, property_id)
          return Outcome.ok(deleted)

     @staticmethod
     def delete_by_admin(db: Session, property_id: int) -> Outcome[Property]:
          deleted = db.scalars(
               delete(Property)
               .where(Property.id == property_id)
               .returning(Property)
          ).one_or_none()

          if deleted is None:
               return Outcome.not_found()

          forget(db, deleted)
          PropertyService._delete_tasks_of(db, property_id)
          return Outcome.ok(deleted)

     @staticmethod
     def get_all(db: Session) -> List[Property]:
          """All properties with the owner loaded."""
          return list(
               db.scalars(
                    select(Property)
                    .options(selectinload(Property.owner))
                    .order_by(Property.created_at.desc(), Property.id.desc())
               )
          )

     @staticmethod
     def get_by_id(db: Session, property_id: int) -> Outcome[Property]:
          found = db.scalars(
               select(Property)
               .options(selectinload(Property.owner))
               .where(Property.id == property_id)
          ).one_or_none()
          if found is None:
               return Outcome.not_found()
          return Outcome.ok(found)

     @staticmethod
     def _delete_tasks_of(db: Session, property_id: int) -> None:
          # Runs in the caller's transaction: a failure here rolls back the property delete too.
          # Backends enforcing the ON DELETE CASCADE key may already have removed the rows.
          db.execute(
               delete(Task)
               .where(Task.property_id == property_id)
               .execution_options(synchronize_session="evaluate")
          )
          logger.info("Deleted property %s and its tasks", property_id)
