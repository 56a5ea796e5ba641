# models/task.py
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Task(TimestampMixin, Base):
     """
     Task model - maintenance work on a property.

     assigned_to_id is derived: it always holds the owner of the referenced
     property and is written only by the task/property services.
     """
     __tablename__ = "tasks"
     __mapper_args__ = {"eager_defaults": True}

     id = Column(Integer, primary_key=True, autoincrement=True)
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=False)
     is_completed = Column(Boolean, default=False, nullable=False)

     # Foreign keys
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     assigned_to_id = Column(
          Integer,
          ForeignKey("users.id"),
          nullable=False,
          index=True
     )

     # Relationships
     property = relationship("Property", back_populates="tasks")
     assigned_to = relationship("User", back_populates="assigned_tasks")

     def __repr__(self):
          return f"<Task(id={self.id}, title='{self.title}', property_id={self.property_id}, assigned_to_id={self.assigned_to_id})>"
