from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from ird_properties.core.database import get_db
from ird_properties.core.security import get_current_user
from ird_properties.models.user import User
from ird_properties.schemas.issuance import IssueCreate, IssuanceResponse
from ird_properties.services.coordinator import LifecycleCoordinator, IssuanceFilter

router = APIRouter(prefix="/issuances", tags=["Issuances"])


@router.get("", response_model=List[IssuanceResponse])
def list_issuances(
    property_id: Optional[int] = None,
    user_id: Optional[int] = None,
    is_permanent: Optional[bool] = None,
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max records to return"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List issuance records, most recent first"""
    filters = IssuanceFilter(property_id=property_id, user_id=user_id, is_permanent=is_permanent)
    return LifecycleCoordinator(db).list_issuances(filters, skip, limit)


@router.post("", response_model=IssuanceResponse, status_code=status.HTTP_201_CREATED)
def issue_property(
    issue_data: IssueCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Issue an approved or adjusted request (store manager)"""
    return LifecycleCoordinator(db).issue(
        current_user, issue_data.request_id, issue_data.model_22_number
    )
