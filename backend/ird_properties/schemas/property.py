from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from ird_properties.models.property import PropertyType


class PropertyBase(BaseModel):
    number: str = Field(min_length=1)
    name: str
    model_number: str
    model_19_number: Optional[str] = None
    serial_number: str
    date: str
    company_name: str
    measurement: str
    property_type: PropertyType = PropertyType.PERMANENT


class PropertyCreate(PropertyBase):
    quantity: int = Field(ge=0)
    unit_price: float = Field(ge=0)


class PropertyUpdate(BaseModel):
    number: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = None
    model_number: Optional[str] = None
    model_19_number: Optional[str] = None
    serial_number: Optional[str] = None
    date: Optional[str] = None
    company_name: Optional[str] = None
    measurement: Optional[str] = None
    property_type: Optional[PropertyType] = None
    quantity: Optional[int] = None
    unit_price: Optional[float] = None


class PropertyResponse(PropertyBase):
    id: int
    property_type: str
    quantity: int
    unit_price: float
    total_price: float
    available_quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
