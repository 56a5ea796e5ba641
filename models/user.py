# models/user.py
import enum

from sqlalchemy import Column, Integer, String, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Role(str, enum.Enum):
     """Closed set of user roles. Values are the strings carried in tokens."""
     AGENT = "agente"
     SUPERADMIN = "superadmin"


class User(TimestampMixin, Base):
     """
     User model - agents and superadmins.
     Email is stored trimmed and lower-cased so the unique index is case-insensitive.
     """
     __tablename__ = "users"
     __mapper_args__ = {"eager_defaults": True}

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(200), nullable=False)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password_hash = Column("password", String(255), nullable=False)
     role = Column(
          Enum(
               Role,
               name="user_role",
               values_callable=lambda roles: [role.value for role in roles],
               create_constraint=True,
          ),
          nullable=False,
          default=Role.AGENT,
     )

     # Relationships
     properties = relationship("Property", back_populates="owner")
     assigned_tasks = relationship("Task", back_populates="assigned_to")

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role.value if self.role else None}')>"
