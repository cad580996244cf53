from __future__ import annotations
import enum
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "Admin"
    MEMBER = "Member"
    MANAGER = "Manager"
    AUTHENTICATOR = "Authenticator"


class UserStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    PENDING = "Pending"


class PaymentMethod(str, enum.Enum):
    PAY_NOW = "Pay Now"
    PAY_LATER = "Pay Later"
    INVOICE = "Invoice"

    @property
    def is_immediate(self) -> bool:
        return self is PaymentMethod.PAY_NOW


class PaymentStatus(str, enum.Enum):
    PAID = "Paid"
    PENDING = "Pending"


class BookingStatus(str, enum.Enum):
    PENDING = "Pending"
    AWAITING_PAYMENT = "Awaiting Payment"
    CONFIRMED = "Confirmed"
    REJECTED = "Rejected"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class InvoiceStatus(str, enum.Enum):
    PENDING = "Pending"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class VisitStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class RequestStatus(str, enum.Enum):
    """Status shared by quote and contact requests."""
    PENDING = "Pending"
    REVIEWED = "Reviewed"
    COMPLETED = "Completed"


class DayPassStatus(str, enum.Enum):
    PENDING = "Pending"
    USED = "Used"
    EXPIRED = "Expired"


BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.AWAITING_PAYMENT, BookingStatus.CONFIRMED, BookingStatus.REJECTED, BookingStatus.CANCELLED}
    ),
    BookingStatus.AWAITING_PAYMENT: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.REJECTED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def check_booking_transition(current: BookingStatus, target: BookingStatus) -> None:
    """Raises ValueError when `target` is not reachable from `current`."""
    if target not in BOOKING_TRANSITIONS[current]:
        raise ValueError(f"Cannot change booking status from {current.value} to {target.value}")
