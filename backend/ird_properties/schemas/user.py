from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from datetime import datetime
from ird_properties.models.user import UserRole


class UserBase(BaseModel):
    username: str
    name: str
    department: Optional[str] = None
    email: Optional[EmailStr] = None


class UserCreate(UserBase):
    password: str = Field(min_length=6)
    role: UserRole = UserRole.USER


class UserUpdate(BaseModel):
    name: Optional[str] = None
    department: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None  # Only admins may change roles
    is_active: Optional[bool] = None


class PasswordChange(BaseModel):
    current_password: Optional[str] = None  # Required when changing your own password
    new_password: str = Field(min_length=6)


class UserResponse(UserBase):
    id: int
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
