# routers/properties.py
"""
Property API routes.

Role-based access:
- Anyone (no token): list and read properties
- Agente: create properties for itself, update / delete its own
- Superadmin: create for any owner, update / delete any property

"Not found" and "not yours" produce the same 404.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import CallerIdentity, require_role
from errors import NotFoundError, ValidationFailed
from models import Role
from schemas.common import PathId
from schemas.property import (
     PropertyCreate,
     PropertyAdminCreate,
     PropertyUpdate,
     PropertyAdminUpdate,
     PropertyResponse,
     PropertyEnvelope,
     PropertyListResponse,
)
from services import PropertyService
from utils.serializers import serialize_property

router = APIRouter(prefix="/api/properties", tags=["properties"])

agent_only = require_role(Role.AGENT)
admin_only = require_role(Role.SUPERADMIN)

NOT_FOUND = "Property not found"


def _changes(payload) -> dict:
     changes = payload.model_dump(exclude_unset=True, exclude_none=True)
     if not changes:
          raise ValidationFailed("No valid fields provided for update")
     return changes


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

@router.get("", response_model=PropertyListResponse, summary="List all properties")
def list_properties(db: Session = Depends(get_session)):
     properties = [serialize_property(prop) for prop in PropertyService.get_all(db)]
     return PropertyListResponse(properties=properties, total=len(properties))


@router.get("/{property_id}", response_model=PropertyResponse, summary="Get property by ID")
def get_property(property_id: PathId, db: Session = Depends(get_session)):
     outcome = PropertyService.get_by_id(db, property_id)
     if not outcome:
          raise NotFoundError(NOT_FOUND)
     return serialize_property(outcome.value)


# ---------------------------------------------------------------------------
# Agente
# ---------------------------------------------------------------------------

@router.post(
     "/agent",
     response_model=PropertyEnvelope,
     status_code=status.HTTP_201_CREATED,
     summary="Create a property (agent)"
)
def create_property_by_agent(
     body: PropertyCreate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(agent_only),
):
     """The caller becomes the owner; an owner field in the body is ignored."""
     new_property = PropertyService.create_by_agent(db, body.model_dump(), caller.id)
     db.commit()
     return PropertyEnvelope(
          message="Property created successfully",
          property=serialize_property(new_property, populate_owner=False),
     )


@router.put("/agent/{property_id}", response_model=PropertyEnvelope, summary="Update own property (agent)")
def update_property_by_agent(
     property_id: PathId,
     body: PropertyUpdate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(agent_only),
):
     outcome = PropertyService.update_by_agent(db, property_id, _changes(body), caller.id)
     if not outcome:
          raise NotFoundError(NOT_FOUND)
     db.commit()
     return PropertyEnvelope(
          message="Property updated successfully",
          property=serialize_property(outcome.value, populate_owner=False),
     )


@router.delete("/agent/{property_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete own property (agent)")
def delete_property_by_agent(
     property_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(agent_only),
):
     """Deletes the property and all of its tasks."""
     if not PropertyService.delete_by_agent(db, property_id, caller.id):
          raise NotFoundError(NOT_FOUND)
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Superadmin
# ---------------------------------------------------------------------------

@router.post(
     "/admin",
     response_model=PropertyEnvelope,
     status_code=status.HTTP_201_CREATED,
     summary="Create a property for any owner (superadmin)"
)
def create_property_by_admin(
     body: PropertyAdminCreate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     new_property = PropertyService.create_by_admin(db, body.model_dump())
     db.commit()
     return PropertyEnvelope(
          message="Property created successfully",
          property=serialize_property(new_property, populate_owner=False),
     )


@router.put("/admin/{property_id}", response_model=PropertyEnvelope, summary="Update any property (superadmin)")
def update_property_by_admin(
     property_id: PathId,
     body: PropertyAdminUpdate,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     """Reassigning the owner also reassigns the property's tasks."""
     outcome = PropertyService.update_by_admin(db, property_id, _changes(body))
     if not outcome:
          raise NotFoundError(NOT_FOUND)
     db.commit()
     return PropertyEnvelope(
          message="Property updated successfully",
          property=serialize_property(outcome.value, populate_owner=False),
     )


@router.delete("/admin/{property_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete any property (superadmin)")
def delete_property_by_admin(
     property_id: PathId,
     db: Session = Depends(get_session),
     caller: CallerIdentity = Depends(admin_only),
):
     if not PropertyService.delete_by_admin(db, property_id):
          raise NotFoundError(NOT_FOUND)
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)
