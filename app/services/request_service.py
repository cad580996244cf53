import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import crud, models, schemas
from app.crud import crud_workspace
from app.models.enums import BookingStatus, UserStatus
from app.utils.clock import to_naive_utc
from app.utils.validation import check_required_fields, validate_email, validate_mobile

logger = logging.getLogger(__name__)

REQUIRED_VISIT_FIELDS = ("workspace_id", "workspace_name", "full_name", "email", "contact_number", "visit_date")


async def create_quote_request(db: AsyncSession, *, quote_in: schemas.QuoteRequestCreate) -> models.QuoteRequest:
    data = quote_in.model_dump()
    data["start_date"] = to_naive_utc(quote_in.start_date)
    quote = await crud.quote_request.create(db, obj_in=data)
    logger.info(f"Quote request {quote.id} received from {quote.work_email}")
    return quote


async def create_contact_request(db: AsyncSession, *, contact_in: schemas.ContactRequestCreate) -> models.ContactRequest:
    contact = await crud.contact_request.create(db, obj_in=contact_in)
    logger.info(f"Contact request {contact.id} received from {contact.email}")
    return contact


async def create_visit_request(db: AsyncSession, *, visit_in: schemas.VisitRequestCreate) -> models.VisitRequest:
    data = visit_in.model_dump()
    missing = check_required_fields(data, REQUIRED_VISIT_FIELDS)
    if missing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=missing)
    if not validate_email(visit_in.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email format")
    if not validate_mobile(visit_in.contact_number):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid contact number format")
    if not await crud_workspace.get_workspace(db, workspace_id=visit_in.workspace_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found")

    data["visit_date"] = to_naive_utc(visit_in.visit_date)
    visit = await crud.visit_request.create(db, obj_in=data)
    logger.info(f"Visit request {visit.id} for workspace {visit.workspace_id} on {visit.visit_date:%Y-%m-%d}")
    return visit


async def update_visit_status(
    db: AsyncSession, *, visit_id: int, status_in: schemas.VisitStatusUpdate
) -> models.VisitRequest:
    visit = await crud.visit_request.get(db, id=visit_id)
    if not visit:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Visit request not found")
    return await crud.visit_request.set_status(db, db_obj=visit, status=status_in.status)


async def list_quote_requests(db: AsyncSession) -> List[models.QuoteRequest]:
    return await crud.quote_request.get_multi(db, limit=500)


async def list_contact_requests(db: AsyncSession) -> List[models.ContactRequest]:
    return await crud.contact_request.get_multi(db, limit=500)


async def list_visit_requests(db: AsyncSession) -> List[models.VisitRequest]:
    return await crud.visit_request.get_multi(db, limit=500)


async def get_dashboard_stats(db: AsyncSession) -> schemas.DashboardStats:
    return schemas.DashboardStats(
        total_users=await crud.crud_user.count_users(db),
        active_members=await crud.crud_user.count_users(db, status=UserStatus.ACTIVE),
        new_quote_requests=await crud.quote_request.count_new(db),
        pending_bookings=await crud.crud_booking.count_by_status(
            db, BookingStatus.PENDING, BookingStatus.AWAITING_PAYMENT
        ),
        outstanding_invoice_amount=await crud.crud_invoice.outstanding_amount(db),
        allotted_workspaces=await crud_workspace.count_allotted_workspaces(db),
    )
