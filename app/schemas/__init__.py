# flake8: noqa
from .common import CamelModel, Message, UserSimple
from .token import TokenPayload
from .user import (
    User, UserCreate, UserLogin, UserProfileUpdate, UserAdminUpdate, UserWithToken
)
from .workspace import (
    Workspace, WorkspaceCreate, WorkspaceUpdate, CommunityMember
)
from .booking import Booking, BookingSubmission, BookingSummary, BookingStatusUpdate
from .invoice import Invoice, InvoiceWithBooking, BookingWithInvoice
from .requests import (
    QuoteRequest, QuoteRequestCreate, ContactRequest, ContactRequestCreate,
    VisitRequest, VisitRequestCreate, VisitStatusUpdate, DashboardStats
)
from .day_pass import DayPass, DayPassCreate, DayPassResponse
from .post import Post, PostCreate, Comment, CommentCreate, Reply
