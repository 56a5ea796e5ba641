# models/property.py
from sqlalchemy import Column, Integer, String, Text, Float, JSON, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Property(TimestampMixin, Base):
     """
     Property model - a listing managed by one agent (its owner).
     Deleting a property removes its tasks.
     """
     __tablename__ = "properties"
     __mapper_args__ = {"eager_defaults": True}

     id = Column(Integer, primary_key=True, autoincrement=True)
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=False)
     price = Column(Float, nullable=False)
     location = Column(String(255), nullable=False)
     bedrooms = Column(Integer, default=0, nullable=False)
     bathrooms = Column(Integer, default=0, nullable=False)
     area = Column(Float, nullable=False)  # square metres
     image_urls = Column(JSON, default=list, nullable=False)

     owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     # Relationships
     owner = relationship("User", back_populates="properties")
     tasks = relationship("Task", back_populates="property", passive_deletes=True)

     def __repr__(self):
          return f"<Property(id={self.id}, title='{self.title}', owner_id={self.owner_id})>"
