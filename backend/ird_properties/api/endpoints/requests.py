from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from ird_properties.core.database import get_db
from ird_properties.core.security import get_current_user
from ird_properties.models.request import RequestStatus
from ird_properties.models.user import User
from ird_properties.schemas.request import (
    RequestCreate, RequestAdjust, RequestReject, RequestResponse, to_request_response
)
from ird_properties.services.coordinator import LifecycleCoordinator, RequestFilter

router = APIRouter(prefix="/requests", tags=["Requests"])


# ============== READS ==============

@router.get("", response_model=List[RequestResponse])
def list_requests(
    status: Optional[RequestStatus] = None,
    property_id: Optional[int] = None,
    user_id: Optional[int] = None,
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max records to return"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List requests (requesters only see their own)"""
    filters = RequestFilter(status=status, property_id=property_id, user_id=user_id)
    requests = LifecycleCoordinator(db).list_requests(current_user, filters, skip, limit)
    return [to_request_response(r) for r in requests]


@router.get("/{request_id}", response_model=RequestResponse)
def get_request(
    request_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single request"""
    return to_request_response(LifecycleCoordinator(db).get_request(current_user, request_id))


# ============== WORKFLOW ==============

@router.post("", response_model=RequestResponse, status_code=status.HTTP_201_CREATED)
def submit_request(
    request_data: RequestCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Submit a request for a property (requester)"""
    request = LifecycleCoordinator(db).submit(
        current_user, request_data.property_id, request_data.requested_quantity
    )
    return to_request_response(request)


@router.post("/{request_id}/approve", response_model=RequestResponse)
def approve_request(
    request_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Approve the full requested quantity (admin)"""
    return to_request_response(LifecycleCoordinator(db).approve(current_user, request_id))


@router.post("/{request_id}/adjust", response_model=RequestResponse)
def adjust_request(
    request_id: int,
    adjust_data: RequestAdjust,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Approve a reduced quantity with a reason (admin)"""
    request = LifecycleCoordinator(db).adjust(
        current_user, request_id, adjust_data.approved_quantity, adjust_data.reason
    )
    return to_request_response(request)


@router.post("/{request_id}/reject", response_model=RequestResponse)
def reject_request(
    request_id: int,
    reject_data: RequestReject,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Reject a pending request (admin)"""
    request = LifecycleCoordinator(db).reject(current_user, request_id, reject_data.reason)
    return to_request_response(request)
