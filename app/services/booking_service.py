import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app import crud, models, schemas
from app.crud import crud_workspace
from app.dependencies import RecordScope
from app.models.enums import (
    BookingStatus, InvoiceStatus, PaymentStatus, check_booking_transition
)
from app.services import invoice_service, pricing_service
from app.utils.clock import utc_now
from app.utils.duration import compute_lease_window
from app.utils.validation import check_required_fields, validate_email, validate_mobile

logger = logging.getLogger(__name__)

REQUIRED_BOOKING_FIELDS = (
    "full_name",
    "email",
    "contact_number",
    "duration",
    "start_date",
    "workspace_id",
    "workspace_name",
    "payment_method",
)


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


async def submit_booking(
    db: AsyncSession,
    *,
    booking_in: schemas.BookingSubmission,
    current_user: Optional[models.User] = None,
) -> Tuple[models.BookingRequest, models.Invoice]:
    """
    Validates and prices a booking, then writes the booking, the workspace
    allotment (immediate payment only) and the invoice in one transaction.

    Any failure after the first write rolls all of them back.
    """
    data = booking_in.model_dump()
    missing = check_required_fields(data, REQUIRED_BOOKING_FIELDS)
    if missing:
        raise _bad_request(missing)
    if not validate_email(booking_in.email):
        raise _bad_request("Invalid email format")
    if not validate_mobile(booking_in.contact_number):
        raise _bad_request("Invalid contact number format")

    workspace, parsed, total = await pricing_service.quote_workspace(
        db, workspace_id=booking_in.workspace_id, duration=booking_in.duration
    )

    try:
        start, end = compute_lease_window(booking_in.start_date, parsed)
    except (ValueError, OverflowError) as e:
        raise _bad_request(str(e))

    workspace_id = workspace.id
    method = booking_in.payment_method
    immediate = method.is_immediate
    payer_id = await invoice_service.resolve_payer_id(db, current_user=current_user, email=booking_in.email)
    invoice_number = await invoice_service.allocate_invoice_number(db)
    now = utc_now()

    try:
        booking = await crud.crud_booking.create_pending(
            db,
            data={
                "workspace_id": workspace_id,
                "workspace_name": booking_in.workspace_name.strip(),
                "full_name": booking_in.full_name.strip(),
                "email": booking_in.email.strip(),
                "contact_number": booking_in.contact_number.strip(),
                "firm_name": booking_in.firm_name,
                "duration": booking_in.duration.strip(),
                "start_date": start,
                "end_date": end,
                "total_amount": total,
                "payment_method": method,
                "payment_status": PaymentStatus.PAID if immediate else PaymentStatus.PENDING,
                "status": BookingStatus.CONFIRMED if immediate else BookingStatus.AWAITING_PAYMENT,
                "invoice_number": invoice_number,
                "user_id": payer_id,
                "created_at": now,
                "updated_at": now,
            },
        )

        if immediate and payer_id is not None:
            allotted = await crud_workspace.try_allot_workspace(
                db,
                workspace_id=workspace_id,
                user_id=payer_id,
                start=start,
                end=end,
                now=now,
                allow_same_occupant=True,
            )
            if not allotted:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Workspace is already allotted")

        invoice = await invoice_service.issue_invoice(db, booking=booking, payer_id=payer_id, now=now)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning(f"Invoice number {invoice_number} was taken concurrently; booking rolled back.")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Booking could not be saved, please retry"
        )
    except Exception:
        await db.rollback()
        logger.warning(f"Booking submission for workspace {workspace_id} by {booking_in.email} rolled back.")
        raise

    logger.info(
        f"Booking {booking.id} created for workspace {workspace_id}: {booking.status.value}, total {total}."
    )
    return booking, invoice


async def list_bookings(db: AsyncSession, *, scope: RecordScope) -> List[models.BookingRequest]:
    return await crud.crud_booking.get_scoped(db, owner_email=scope.owner_email)


async def get_booking(db: AsyncSession, *, booking_id: int, scope: RecordScope) -> models.BookingRequest:
    booking = await crud.crud_booking.get(db, id=booking_id)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    if not scope.permits(booking.email):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to view this booking")
    return booking


async def update_booking_status(
    db: AsyncSession, *, booking_id: int, new_status: BookingStatus
) -> models.BookingRequest:
    booking = await crud.crud_booking.get(db, id=booking_id)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    try:
        check_booking_transition(booking.status, new_status)
    except ValueError as e:
        raise _bad_request(str(e))

    now = utc_now()
    invoice = await crud.crud_invoice.get_by_booking_id(db, booking_id=booking.id)
    try:
        booking.status = new_status
        booking.updated_at = now
        if new_status == BookingStatus.CONFIRMED:
            booking.payment_status = PaymentStatus.PAID
            if invoice and invoice.status == InvoiceStatus.PENDING:
                invoice.status = InvoiceStatus.PAID
                invoice.paid_date = now
        elif new_status in (BookingStatus.CANCELLED, BookingStatus.REJECTED):
            if invoice and invoice.status == InvoiceStatus.PENDING:
                invoice.status = InvoiceStatus.CANCELLED
            if booking.workspace_id is not None and booking.user_id is not None:
                released = await crud_workspace.release_workspace(
                    db,
                    workspace_id=booking.workspace_id,
                    now=now,
                    occupant_id=booking.user_id,
                    allotment_end=booking.end_date,
                )
                if released:
                    logger.info(f"Workspace {booking.workspace_id} released after booking {booking.id} was {new_status.value}.")
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(booking)
    logger.info(f"Booking {booking.id} status set to {new_status.value}.")
    return booking
