# schemas/property.py
"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import datetime
from typing import List, Optional, Union

from pydantic import ConfigDict, Field

from .common import CamelModel, RecordId
from .user import UserResponse


class PropertyCreate(CamelModel):
     """Schema for an agent creating a property. The owner is the caller."""
     title: str = Field(..., min_length=1, max_length=255)
     description: str = Field(..., min_length=1)
     price: float = Field(..., ge=0)
     location: str = Field(..., min_length=1, max_length=255)
     bedrooms: int = Field(default=0, ge=0)
     bathrooms: int = Field(default=0, ge=0)
     area: float = Field(..., gt=0, description="Area in square metres")
     image_urls: List[str] = Field(default_factory=list)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "title": "Casa de campo",
                    "description": "Casa con jardín y piscina",
                    "price": 250000,
                    "location": "Cali, Colombia",
                    "bedrooms": 3,
                    "bathrooms": 2,
                    "area": 150,
                    "imageUrls": ["https://example.com/image1.jpg"]
               }
          }
     )


class PropertyAdminCreate(PropertyCreate):
     """Schema for a superadmin creating a property for any user."""
     owner_id: RecordId = Field(..., alias="owner", description="User ID (must exist)")


class PropertyUpdate(CamelModel):
     """Schema for an agent updating one of their properties."""
     title: Optional[str] = Field(None, min_length=1, max_length=255)
     description: Optional[str] = Field(None, min_length=1)
     price: Optional[float] = Field(None, ge=0)
     location: Optional[str] = Field(None, min_length=1, max_length=255)
     bedrooms: Optional[int] = Field(None, ge=0)
     bathrooms: Optional[int] = Field(None, ge=0)
     area: Optional[float] = Field(None, gt=0)
     image_urls: Optional[List[str]] = None


class PropertyAdminUpdate(PropertyUpdate):
     """Schema for a superadmin updating any property; owner may be reassigned."""
     owner_id: Optional[RecordId] = Field(None, alias="owner")


class PropertyResponse(CamelModel):
     """
     Schema for property response.

     owner is the full user on property endpoints and the bare user ID when
     the property is nested inside a task.
     """
     id: int
     title: str
     description: str
     price: float
     location: str
     bedrooms: int
     bathrooms: int
     area: float
     image_urls: List[str]
     owner: Union[UserResponse, int]
     created_at: datetime
     updated_at: datetime


class PropertyEnvelope(CamelModel):
     message: str
     property: PropertyResponse


class PropertyListResponse(CamelModel):
     properties: List[PropertyResponse]
     total: int
