from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.enums import RequestStatus, VisitStatus
from app.models.requests import ContactRequest, QuoteRequest, VisitRequest
from app.schemas.requests import (
    ContactRequestCreate, QuoteRequestCreate, VisitRequestCreate, VisitStatusUpdate
)


class CRUDQuoteRequest(CRUDBase[QuoteRequest, QuoteRequestCreate, QuoteRequestCreate]):
    async def count_new(self, db: AsyncSession) -> int:
        return await self.count(db, QuoteRequest.status == RequestStatus.PENDING)


class CRUDVisitRequest(CRUDBase[VisitRequest, VisitRequestCreate, VisitStatusUpdate]):
    async def set_status(self, db: AsyncSession, *, db_obj: VisitRequest, status: VisitStatus) -> VisitRequest:
        return await self.update(db, db_obj=db_obj, obj_in={"status": status})


quote_request = CRUDQuoteRequest(QuoteRequest)
contact_request = CRUDBase[ContactRequest, ContactRequestCreate, ContactRequestCreate](ContactRequest)
visit_request = CRUDVisitRequest(VisitRequest)
