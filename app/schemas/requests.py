from pydantic import EmailStr, Field
from datetime import datetime
from typing import Optional

from app.models.enums import RequestStatus, VisitStatus
from .common import CamelModel


class QuoteRequestCreate(CamelModel):
    full_name: str = Field(..., min_length=1)
    work_email: EmailStr
    contact_number: str = Field(..., min_length=1)
    firm_name: str = Field(..., min_length=1)
    firm_type: str = Field(..., min_length=1)
    required_workspace: str = Field(..., min_length=1)
    capacity: int = Field(..., ge=1)
    start_date: datetime
    duration: str = Field(..., min_length=1)
    additional_requirements: Optional[str] = None


class QuoteRequest(QuoteRequestCreate):
    id: int
    work_email: str
    status: RequestStatus
    created_at: datetime


class ContactRequestCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class ContactRequest(ContactRequestCreate):
    id: int
    email: str
    status: RequestStatus
    created_at: datetime


class VisitRequestCreate(CamelModel):
    workspace_id: Optional[int] = None
    workspace_name: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    contact_number: Optional[str] = None
    visit_date: Optional[datetime] = None


class VisitRequest(CamelModel):
    id: int
    workspace_id: Optional[int] = None
    workspace_name: str
    full_name: str
    email: str
    contact_number: str
    visit_date: datetime
    status: VisitStatus
    created_at: datetime


class VisitStatusUpdate(CamelModel):
    status: VisitStatus


class DashboardStats(CamelModel):
    total_users: int
    active_members: int
    new_quote_requests: int
    pending_bookings: int
    outstanding_invoice_amount: int
    allotted_workspaces: int
