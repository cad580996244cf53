from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.day_pass import DayPass
from app.schemas.day_pass import DayPassCreate


class CRUDDayPass(CRUDBase[DayPass, DayPassCreate, DayPassCreate]):
    async def get_by_code(self, db: AsyncSession, *, pass_code: str) -> Optional[DayPass]:
        result = await db.execute(select(DayPass).where(DayPass.pass_code == pass_code.strip().upper()))
        return result.scalar_one_or_none()


day_pass = CRUDDayPass(DayPass)
