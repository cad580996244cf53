from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.utils.clock import to_naive_utc
from .common import CamelModel, UserSimple


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    return to_naive_utc(value) if value is not None else None


class WorkspaceBase(CamelModel):
    name: str
    location: str
    floor: Optional[str] = None
    type: str
    capacity: str
    base_price: float = Field(0, ge=0)
    price_label: Optional[str] = "Contact for Pricing"
    amenities: List[str] = Field(default_factory=lambda: ["High-speed WiFi", "Coffee Bar"])
    featured: bool = False
    has_conference_hall: bool = False
    has_cabin: bool = False


class WorkspaceCreate(WorkspaceBase):
    allotted_to_id: Optional[int] = None
    allotment_start: Optional[datetime] = None
    allotment_end: Optional[datetime] = None

    naive_allotment = field_validator("allotment_start", "allotment_end")(_naive_utc)


class WorkspaceUpdate(CamelModel):
    name: Optional[str] = None
    location: Optional[str] = None
    floor: Optional[str] = None
    type: Optional[str] = None
    capacity: Optional[str] = None
    base_price: Optional[float] = Field(None, ge=0)
    price_label: Optional[str] = None
    amenities: Optional[List[str]] = None
    featured: Optional[bool] = None
    has_conference_hall: Optional[bool] = None
    has_cabin: Optional[bool] = None
    # Allotment fields are only applied when present in the request body;
    # an explicit null releases the workspace.
    allotted_to_id: Optional[int] = None
    allotment_start: Optional[datetime] = None
    allotment_end: Optional[datetime] = None

    naive_allotment = field_validator("allotment_start", "allotment_end")(_naive_utc)


class Workspace(WorkspaceBase):
    id: int
    images: List[str] = []
    allotted_to_id: Optional[int] = None
    allotted_to: Optional[UserSimple] = None
    allotment_start: Optional[datetime] = None
    allotment_end: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class CommunityMember(CamelModel):
    workspace_name: str
    user: UserSimple
