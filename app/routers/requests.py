from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.db.session import get_db
from app import models, schemas, services
from app.dependencies import (
    RecordScope, get_current_user, get_optional_current_user, get_record_scope, require_admin
)

router = APIRouter()


# --- Quotes ---
@router.post("/quote", response_model=schemas.QuoteRequest, status_code=status.HTTP_201_CREATED)
async def create_quote_request(quote_in: schemas.QuoteRequestCreate, db: AsyncSession = Depends(get_db)):
    return await services.request_service.create_quote_request(db, quote_in=quote_in)


@router.get("/quote", response_model=List[schemas.QuoteRequest])
async def list_quote_requests(db: AsyncSession = Depends(get_db), _: models.User = Depends(require_admin)):
    return await services.request_service.list_quote_requests(db)


# --- Contact ---
@router.post("/contact", response_model=schemas.ContactRequest, status_code=status.HTTP_201_CREATED)
async def create_contact_request(contact_in: schemas.ContactRequestCreate, db: AsyncSession = Depends(get_db)):
    return await services.request_service.create_contact_request(db, contact_in=contact_in)


@router.get("/contact", response_model=List[schemas.ContactRequest])
async def list_contact_requests(db: AsyncSession = Depends(get_db), _: models.User = Depends(require_admin)):
    return await services.request_service.list_contact_requests(db)


# --- Visits ---
@router.post("/visit", response_model=schemas.VisitRequest, status_code=status.HTTP_201_CREATED)
async def create_visit_request(visit_in: schemas.VisitRequestCreate, db: AsyncSession = Depends(get_db)):
    return await services.request_service.create_visit_request(db, visit_in=visit_in)


@router.get("/visit", response_model=List[schemas.VisitRequest])
async def list_visit_requests(db: AsyncSession = Depends(get_db), _: models.User = Depends(require_admin)):
    return await services.request_service.list_visit_requests(db)


@router.put("/visit/{visit_id}/status", response_model=schemas.VisitRequest)
async def update_visit_status(
    visit_id: int,
    status_in: schemas.VisitStatusUpdate,
    db: AsyncSession = Depends(get_db),
    _: models.User = Depends(require_admin),
):
    return await services.request_service.update_visit_status(db, visit_id=visit_id, status_in=status_in)


# --- Bookings ---
@router.post("/booking", response_model=schemas.BookingWithInvoice, status_code=status.HTTP_201_CREATED)
async def submit_booking(
    booking_in: schemas.BookingSubmission,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[models.User] = Depends(get_optional_current_user),
):
    """
    Public booking form. With a valid token the booking is tied to the caller;
    otherwise the requester is looked up by email.
    """
    booking, invoice = await services.booking_service.submit_booking(
        db, booking_in=booking_in, current_user=current_user
    )
    return {"booking": booking, "invoice": invoice}


@router.get("/booking", response_model=List[schemas.Booking])
async def list_bookings(db: AsyncSession = Depends(get_db), scope: RecordScope = Depends(get_record_scope)):
    return await services.booking_service.list_bookings(db, scope=scope)


@router.get("/booking/{booking_id}", response_model=schemas.Booking)
async def read_booking(
    booking_id: int, db: AsyncSession = Depends(get_db), scope: RecordScope = Depends(get_record_scope)
):
    return await services.booking_service.get_booking(db, booking_id=booking_id, scope=scope)


@router.put("/booking/{booking_id}/status", response_model=schemas.Booking)
async def update_booking_status(
    booking_id: int,
    status_in: schemas.BookingStatusUpdate,
    db: AsyncSession = Depends(get_db),
    _: models.User = Depends(require_admin),
):
    return await services.booking_service.update_booking_status(
        db, booking_id=booking_id, new_status=status_in.status
    )


# --- Invoices ---
@router.get("/invoices", response_model=List[schemas.InvoiceWithBooking])
async def list_invoices(db: AsyncSession = Depends(get_db), scope: RecordScope = Depends(get_record_scope)):
    return await services.invoice_service.list_invoices(db, scope=scope)


# --- Dashboard ---
@router.get("/stats", response_model=schemas.DashboardStats)
async def read_stats(db: AsyncSession = Depends(get_db), _: models.User = Depends(require_admin)):
    return await services.request_service.get_dashboard_stats(db)
