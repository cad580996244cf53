from sqlalchemy import Integer, String, DateTime, ForeignKey, Enum as SQLAlchemyEnum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from typing import Optional, TYPE_CHECKING
from datetime import datetime

from app.db.base_class import Base, TimestampMixin
from app.models.enums import BookingStatus, PaymentMethod, PaymentStatus

if TYPE_CHECKING:
    from .invoice import Invoice
    from .workspace import Workspace


class BookingRequest(TimestampMixin, Base):
    __tablename__ = "booking_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    workspace_id: Mapped[Optional[int]] = mapped_column(ForeignKey("workspaces.id", ondelete="SET NULL"), nullable=True, index=True)
    workspace_name: Mapped[str] = mapped_column(String, nullable=False)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    contact_number: Mapped[str] = mapped_column(String, nullable=False)
    firm_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    duration: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_method: Mapped[PaymentMethod] = mapped_column(SQLAlchemyEnum(PaymentMethod, name="payment_method_enum"), nullable=False)
    payment_status: Mapped[PaymentStatus] = mapped_column(
        SQLAlchemyEnum(PaymentStatus, name="payment_status_enum"), default=PaymentStatus.PENDING, nullable=False
    )
    status: Mapped[BookingStatus] = mapped_column(
        SQLAlchemyEnum(BookingStatus, name="booking_status_enum"), default=BookingStatus.PENDING, nullable=False, index=True
    )
    invoice_number: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    user_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    workspace: Mapped[Optional["Workspace"]] = relationship()
    invoice: Mapped[Optional["Invoice"]] = relationship(back_populates="booking", uselist=False)

    def __repr__(self) -> str:
        return f"<BookingRequest(id={self.id}, workspace_id={self.workspace_id}, status='{self.status.value}')>"
