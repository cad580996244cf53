import logging
import secrets
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import crud, models
from app.core.config import settings
from app.dependencies import RecordScope
from app.models.enums import InvoiceStatus, UserStatus

logger = logging.getLogger(__name__)

INVOICE_NUMBER_ATTEMPTS = 5


def generate_invoice_number() -> str:
    return f"INV-{secrets.token_hex(3).upper()}"


async def allocate_invoice_number(db: AsyncSession) -> str:
    """A fresh invoice number not yet used by any booking."""
    for _ in range(INVOICE_NUMBER_ATTEMPTS):
        number = generate_invoice_number()
        if not await crud.crud_booking.get_by_invoice_number(db, invoice_number=number):
            return number
        logger.warning(f"Invoice number {number} is already taken, generating another.")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Could not allocate an invoice number, please retry",
    )


async def resolve_payer_id(
    db: AsyncSession, *, current_user: Optional[models.User], email: Optional[str]
) -> Optional[int]:
    """
    The session user when there is one, otherwise an active or pending
    registered user with the booking email.
    """
    if current_user is not None:
        return current_user.id
    if not email:
        return None
    user = await crud.crud_user.get_user_by_email(db, email=email)
    if not user or user.status == UserStatus.INACTIVE:
        return None
    return user.id


async def issue_invoice(
    db: AsyncSession, *, booking: models.BookingRequest, payer_id: Optional[int], now: datetime
) -> models.Invoice:
    """
    Adds the invoice paired with `booking` to the current transaction.

    Immediate payments are issued Paid with no due date; deferred payments are
    Pending and due INVOICE_DUE_DAYS from now.
    """
    if booking.total_amount is None or booking.total_amount < 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invoice amount is required")
    if not booking.invoice_number:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invoice number is required")
    if not booking.workspace_name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Workspace name is required")

    immediate = booking.payment_method.is_immediate
    invoice = await crud.crud_invoice.create_pending(
        db,
        data={
            "invoice_number": booking.invoice_number,
            "booking_id": booking.id,
            "user_id": payer_id,
            "customer_name": booking.full_name,
            "customer_email": booking.email,
            "workspace_name": booking.workspace_name,
            "amount": booking.total_amount,
            "payment_method": booking.payment_method,
            "status": InvoiceStatus.PAID if immediate else InvoiceStatus.PENDING,
            "due_date": None if immediate else now + timedelta(days=settings.INVOICE_DUE_DAYS),
            "paid_date": now if immediate else None,
            "created_at": now,
            "updated_at": now,
        },
    )
    logger.info(f"Issued invoice {invoice.invoice_number} for booking {booking.id} ({invoice.status.value}).")
    return invoice


async def list_invoices(db: AsyncSession, *, scope: RecordScope) -> List[models.Invoice]:
    return await crud.crud_invoice.get_scoped(db, owner_email=scope.owner_email)
