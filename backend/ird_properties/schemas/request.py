from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Literal, Optional, Union
from datetime import datetime
from ird_properties.models.request import PropertyRequest


class RequestCreate(BaseModel):
    property_id: int
    requested_quantity: int  # Range is checked by the lifecycle


class RequestAdjust(BaseModel):
    approved_quantity: int
    reason: Optional[str] = None


class RequestReject(BaseModel):
    reason: Optional[str] = None


class RequestBase(BaseModel):
    id: int
    user_id: Optional[int] = None
    user_name: str
    user_department: str
    property_id: Optional[int] = None
    property_number: str
    property_name: str
    quantity_type: str
    requested_quantity: int
    admin_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# One variant per status, so approved_quantity only exists where it is set
class PendingRequest(RequestBase):
    status: Literal["pending"]


class ApprovedRequest(RequestBase):
    status: Literal["approved"]
    approved_quantity: int


class AdjustedRequest(RequestBase):
    status: Literal["adjusted"]
    approved_quantity: int
    reason: Optional[str] = None


class RejectedRequest(RequestBase):
    status: Literal["rejected"]
    reason: Optional[str] = None


class IssuedRequest(RequestBase):
    status: Literal["issued"]
    approved_quantity: int
    reason: Optional[str] = None
    store_manager_id: Optional[int] = None
    issued_at: datetime


RequestResponse = Annotated[
    Union[PendingRequest, ApprovedRequest, AdjustedRequest, RejectedRequest, IssuedRequest],
    Field(discriminator="status"),
]

REQUEST_VARIANTS = {
    "pending": PendingRequest,
    "approved": ApprovedRequest,
    "adjusted": AdjustedRequest,
    "rejected": RejectedRequest,
    "issued": IssuedRequest,
}


def to_request_response(request: PropertyRequest) -> RequestBase:
    """Build the status-specific response model for a request row"""
    return REQUEST_VARIANTS[request.status].model_validate(request)
