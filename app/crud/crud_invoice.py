from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional

from app.crud.base import CRUDBase
from app.models.enums import InvoiceStatus
from app.models.invoice import Invoice
from app.schemas.invoice import Invoice as InvoiceSchema


class CRUDInvoice(CRUDBase[Invoice, InvoiceSchema, InvoiceSchema]):
    async def create_pending(self, db: AsyncSession, *, data: Dict[str, Any]) -> Invoice:
        """Adds and flushes an invoice without committing."""
        return await self.create(db, obj_in=data, commit=False)

    async def get_by_booking_id(self, db: AsyncSession, *, booking_id: int) -> Optional[Invoice]:
        result = await db.execute(select(Invoice).where(Invoice.booking_id == booking_id))
        return result.scalar_one_or_none()

    async def get_scoped(
        self, db: AsyncSession, *, owner_email: Optional[str] = None, skip: int = 0, limit: int = 100
    ) -> List[Invoice]:
        stmt = select(Invoice)
        if owner_email is not None:
            stmt = stmt.where(func.lower(Invoice.customer_email) == owner_email.lower())
        stmt = stmt.order_by(Invoice.created_at.desc(), Invoice.id.desc()).offset(skip).limit(limit)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def outstanding_amount(self, db: AsyncSession) -> int:
        result = await db.execute(
            select(func.coalesce(func.sum(Invoice.amount), 0)).where(Invoice.status == InvoiceStatus.PENDING)
        )
        return int(result.scalar_one())


crud_invoice = CRUDInvoice(Invoice)
