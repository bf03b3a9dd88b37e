from ird_properties.schemas.user import (
    UserCreate, UserUpdate, UserResponse, PasswordChange, Token
)
from ird_properties.schemas.property import (
    PropertyCreate, PropertyUpdate, PropertyResponse
)
from ird_properties.schemas.request import (
    RequestCreate, RequestAdjust, RequestReject, RequestResponse,
    PendingRequest, ApprovedRequest, AdjustedRequest, RejectedRequest, IssuedRequest,
    to_request_response
)
from ird_properties.schemas.issuance import IssueCreate, IssuanceResponse
from ird_properties.schemas.dashboard import DashboardStats

__all__ = [
    # User
    "UserCreate", "UserUpdate", "UserResponse", "PasswordChange", "Token",
    # Property
    "PropertyCreate", "PropertyUpdate", "PropertyResponse",
    # Request
    "RequestCreate", "RequestAdjust", "RequestReject", "RequestResponse",
    "PendingRequest", "ApprovedRequest", "AdjustedRequest", "RejectedRequest", "IssuedRequest",
    "to_request_response",
    # Issuance
    "IssueCreate", "IssuanceResponse",
    # Dashboard
    "DashboardStats",
]
