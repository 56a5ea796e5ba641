# utils/serializers.py
"""
Model → response schema mapping.

These are the only functions that turn ORM objects into wire shapes, so the
password hash never leaves the service layer.
"""
from models import Property, Task, User
from schemas import PropertyResponse, RoleEnum, TaskResponse, UserResponse


def serialize_user(user: User) -> UserResponse:
     return UserResponse(
          id=user.id,
          name=user.name,
          email=user.email,
          role=RoleEnum(user.role.value),
          created_at=user.created_at,
          updated_at=user.updated_at,
     )


def serialize_property(prop: Property, populate_owner: bool = True) -> PropertyResponse:
     """
     Build a PropertyResponse.

     populate_owner=False keeps owner as the bare user ID (used when the
     property is nested inside a task, and for write responses).
     """
     owner = serialize_user(prop.owner) if populate_owner else prop.owner_id
     return PropertyResponse(
          id=prop.id,
          title=prop.title,
          description=prop.description,
          price=prop.price,
          location=prop.location,
          bedrooms=prop.bedrooms,
          bathrooms=prop.bathrooms,
          area=prop.area,
          image_urls=list(prop.image_urls or []),
          owner=owner,
          created_at=prop.created_at,
          updated_at=prop.updated_at,
     )


def serialize_task(task: Task) -> TaskResponse:
     return TaskResponse(
          id=task.id,
          title=task.title,
          description=task.description,
          is_completed=task.is_completed,
          property=serialize_property(task.property, populate_owner=False),
          assigned_to=serialize_user(task.assigned_to),
          created_at=task.created_at,
          updated_at=task.updated_at,
     )
