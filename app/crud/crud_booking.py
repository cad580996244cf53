from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional

from app.crud.base import CRUDBase
from app.models.booking import BookingRequest
from app.models.enums import BookingStatus
from app.schemas.booking import BookingStatusUpdate


class CRUDBooking(CRUDBase[BookingRequest, BookingStatusUpdate, BookingStatusUpdate]):
    async def create_pending(self, db: AsyncSession, *, data: Dict[str, Any]) -> BookingRequest:
        """Adds and flushes a booking without committing."""
        return await self.create(db, obj_in=data, commit=False)

    async def get_by_invoice_number(self, db: AsyncSession, *, invoice_number: str) -> Optional[BookingRequest]:
        result = await db.execute(select(BookingRequest).where(BookingRequest.invoice_number == invoice_number))
        return result.scalar_one_or_none()

    async def get_scoped(
        self, db: AsyncSession, *, owner_email: Optional[str] = None, skip: int = 0, limit: int = 100
    ) -> List[BookingRequest]:
        """Newest first; `owner_email` limits the result to one requester."""
        stmt = select(BookingRequest)
        if owner_email is not None:
            stmt = stmt.where(func.lower(BookingRequest.email) == owner_email.lower())
        stmt = (
            stmt.order_by(BookingRequest.created_at.desc(), BookingRequest.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(self, db: AsyncSession, *statuses: BookingStatus) -> int:
        return await self.count(db, BookingRequest.status.in_(statuses))


crud_booking = CRUDBooking(BookingRequest)
