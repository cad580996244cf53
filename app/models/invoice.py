from sqlalchemy import Integer, String, DateTime, ForeignKey, Enum as SQLAlchemyEnum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from typing import Optional, TYPE_CHECKING
from datetime import datetime

from app.db.base_class import Base, TimestampMixin
from app.models.enums import InvoiceStatus, PaymentMethod

if TYPE_CHECKING:
    from .booking import BookingRequest


class Invoice(TimestampMixin, Base):
    __tablename__ = "invoices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    invoice_number: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    booking_id: Mapped[int] = mapped_column(ForeignKey("booking_requests.id", ondelete="CASCADE"), unique=True, nullable=False)
    user_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    customer_name: Mapped[str] = mapped_column(String, nullable=False)
    customer_email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    workspace_name: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_method: Mapped[PaymentMethod] = mapped_column(SQLAlchemyEnum(PaymentMethod, name="payment_method_enum"), nullable=False)
    status: Mapped[InvoiceStatus] = mapped_column(
        SQLAlchemyEnum(InvoiceStatus, name="invoice_status_enum"), default=InvoiceStatus.PENDING, nullable=False
    )
    due_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    paid_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    booking: Mapped["BookingRequest"] = relationship(back_populates="invoice", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Invoice(number='{self.invoice_number}', status='{self.status.value}')>"
