from pydantic import field_validator
from datetime import datetime
from typing import Optional

from app.models.enums import BookingStatus, PaymentMethod, PaymentStatus
from app.utils.clock import to_naive_utc
from .common import CamelModel


class BookingSubmission(CamelModel):
    """
    Public booking form. Every field is optional at the schema level so the
    booking service can report the first missing one by name.
    """
    workspace_id: Optional[int] = None
    workspace_name: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    contact_number: Optional[str] = None
    firm_name: Optional[str] = None
    duration: Optional[str] = None
    start_date: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None

    @field_validator("start_date")
    @classmethod
    def _naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value) if value is not None else None


class Booking(CamelModel):
    id: int
    workspace_id: Optional[int] = None
    workspace_name: str
    full_name: str
    email: str
    contact_number: str
    firm_name: Optional[str] = None
    duration: str
    start_date: datetime
    end_date: datetime
    total_amount: int
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    status: BookingStatus
    invoice_number: str
    user_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class BookingSummary(CamelModel):
    id: int
    status: BookingStatus
    duration: str
    start_date: datetime
    end_date: datetime


class BookingStatusUpdate(CamelModel):
    status: BookingStatus
