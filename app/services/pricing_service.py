import logging
import math
from decimal import Decimal
from typing import Tuple, Union

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import models
from app.crud import crud_workspace
from app.utils.duration import ParsedDuration, parse_duration

logger = logging.getLogger(__name__)


def price_for(base_price: Union[Decimal, float, int, None], parsed: ParsedDuration) -> int:
    """Base monthly price times the month-equivalent, rounded up to a whole amount."""
    amount = float(base_price or 0) * parsed.month_equivalent
    # drop float noise such as 30.44 days -> 1.0000000000000002 months
    return math.ceil(round(amount, 6))


async def quote_workspace(
    db: AsyncSession, *, workspace_id: int, duration: str
) -> Tuple[models.Workspace, ParsedDuration, int]:
    """
    Prices a booking against the persisted workspace. The workspace is resolved
    before the duration, so an unknown workspace is a 404 even when the
    duration is also bad.

    The base price is read at call time, so a price edit racing a submission
    may or may not be seen.
    """
    workspace = await crud_workspace.get_workspace(db, workspace_id=workspace_id)
    if not workspace:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found")
    try:
        parsed = parse_duration(duration)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    total = price_for(workspace.base_price, parsed)
    logger.debug(f"Priced workspace {workspace_id} for {parsed.magnitude} {parsed.unit.value}(s): {total}")
    return workspace, parsed, total
