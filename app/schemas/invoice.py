from datetime import datetime
from typing import Optional

from app.models.enums import InvoiceStatus, PaymentMethod
from .common import CamelModel
from .booking import Booking, BookingSummary


class Invoice(CamelModel):
    id: int
    invoice_number: str
    booking_id: int
    user_id: Optional[int] = None
    customer_name: str
    customer_email: str
    workspace_name: str
    amount: int
    payment_method: PaymentMethod
    status: InvoiceStatus
    due_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    created_at: datetime


class InvoiceWithBooking(Invoice):
    booking: Optional[BookingSummary] = None


class BookingWithInvoice(CamelModel):
    booking: Booking
    invoice: Invoice
