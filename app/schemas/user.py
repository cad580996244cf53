from typing import Optional
from pydantic import Field
from datetime import datetime

from app.models.enums import UserRole, UserStatus
from .common import CamelModel


class UserBase(CamelModel):
    """
    Common user attributes.
    """
    name: Optional[str] = Field(None, examples=["Jane Doe"])
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    mobile: Optional[str] = None
    organization: Optional[str] = None


class UserCreate(UserBase):
    """Public registration. Presence and format checks run in the auth service."""
    password: Optional[str] = None
    role: Optional[UserRole] = None


class UserLogin(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserProfileUpdate(UserBase):
    password: Optional[str] = None
    old_password: Optional[str] = None


class UserAdminUpdate(UserBase):
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None


class User(CamelModel):
    id: int
    name: str
    email: str
    mobile: Optional[str] = None
    organization: Optional[str] = None
    role: UserRole
    status: UserStatus
    joined_date: Optional[str] = None
    last_active: Optional[str] = None
    created_at: datetime


class UserWithToken(User):
    token: str
