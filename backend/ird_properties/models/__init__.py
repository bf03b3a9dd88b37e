from ird_properties.models.user import User, UserRole
from ird_properties.models.property import Property, PropertyType
from ird_properties.models.request import PropertyRequest, RequestStatus
from ird_properties.models.issuance import Issuance

__all__ = [
    "User",
    "UserRole",
    "Property",
    "PropertyType",
    "PropertyRequest",
    "RequestStatus",
    "Issuance",
]
