# Import the Base class to make it accessible for models
# and for Alembic discovery via Base.metadata
from app.db.base_class import Base  # noqa: F401

from .enums import (
    UserRole, UserStatus, PaymentMethod, PaymentStatus, BookingStatus,
    InvoiceStatus, VisitStatus, RequestStatus, DayPassStatus,
)
from .user import User
from .workspace import Workspace
from .booking import BookingRequest
from .invoice import Invoice
from .requests import VisitRequest, QuoteRequest, ContactRequest
from .day_pass import DayPass
from .post import Post, PostComment, CommentReply

__all__ = [
    "Base",
    "User",
    "Workspace",
    "BookingRequest",
    "Invoice",
    "VisitRequest",
    "QuoteRequest",
    "ContactRequest",
    "DayPass",
    "Post",
    "PostComment",
    "CommentReply",
    "UserRole",
    "UserStatus",
    "PaymentMethod",
    "PaymentStatus",
    "BookingStatus",
    "InvoiceStatus",
    "VisitStatus",
    "RequestStatus",
    "DayPassStatus",
]
