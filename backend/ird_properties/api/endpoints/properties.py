from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List

from ird_properties.core.database import get_db
from ird_properties.core.security import get_current_user
from ird_properties.models.user import User
from ird_properties.schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse
from ird_properties.services.coordinator import LifecycleCoordinator

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get("", response_model=List[PropertyResponse])
def list_properties(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max records to return"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the property catalog, newest first"""
    return LifecycleCoordinator(db).list_properties(skip, limit)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get property details including available quantity"""
    return LifecycleCoordinator(db).get_property(property_id)


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    prop_data: PropertyCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Register a new property (admin or store manager)"""
    return LifecycleCoordinator(db).register_property(current_user, **prop_data.model_dump())


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    prop_data: PropertyUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a property (admin or store manager). Quantity changes keep reserved stock reserved."""
    update_data = prop_data.model_dump(exclude_unset=True)
    return LifecycleCoordinator(db).update_property(current_user, property_id, **update_data)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
    property_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a property (admin or store manager)"""
    LifecycleCoordinator(db).delete_property(current_user, property_id)
