from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class IssueCreate(BaseModel):
    request_id: int
    model_22_number: Optional[str] = None


class IssuanceResponse(BaseModel):
    id: int
    request_id: int
    property_id: Optional[int] = None
    user_id: Optional[int] = None
    user_name: str
    user_department: str
    property_number: str
    property_name: str
    model_number: str
    model_19_number: Optional[str] = None
    model_22_number: Optional[str] = None
    serial_number: str
    quantity_type: str
    property_type: str
    is_permanent: bool
    issued_quantity: int
    issued_at: datetime
    store_manager_id: Optional[int] = None
    store_manager_name: str

    model_config = ConfigDict(from_attributes=True)
