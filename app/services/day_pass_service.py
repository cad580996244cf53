import io
import logging
import uuid
from typing import List, Optional

import qrcode
from fastapi import BackgroundTasks, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import crud, models, schemas
from app.core.config import settings
from app.models.enums import DayPassStatus
from app.utils.clock import to_naive_utc, utc_now
from app.utils.email import send_day_pass_email

logger = logging.getLogger(__name__)


def generate_pass_code() -> str:
    return f"{settings.DAY_PASS_PREFIX}-{uuid.uuid4().hex[:8].upper()}"


def render_qr_png(data: str) -> Optional[bytes]:
    """PNG bytes of a QR code for `data`, or None when rendering fails."""
    try:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(data)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()
    except Exception:
        logger.error(f"Failed to render QR code for {data}", exc_info=True)
        return None


def deliver_day_pass(to_email: str, name: str, pass_code: str, visit_date: str) -> None:
    send_day_pass_email(to_email, name, pass_code, visit_date, qr_png=render_qr_png(pass_code))


async def create_day_pass(
    db: AsyncSession, *, pass_in: schemas.DayPassCreate, background_tasks: BackgroundTasks
) -> models.DayPass:
    data = pass_in.model_dump()
    data["visit_date"] = to_naive_utc(pass_in.visit_date)
    data["pass_code"] = generate_pass_code()
    day_pass = await crud.day_pass.create(db, obj_in=data)
    logger.info(f"Day pass {day_pass.pass_code} issued to {day_pass.email} for {day_pass.visit_date:%Y-%m-%d}")
    background_tasks.add_task(
        deliver_day_pass, day_pass.email, day_pass.name, day_pass.pass_code, f"{day_pass.visit_date:%B %d, %Y}"
    )
    return day_pass


async def list_day_passes(db: AsyncSession) -> List[models.DayPass]:
    return await crud.day_pass.get_multi(db, limit=500)


async def verify_day_pass(db: AsyncSession, *, pass_code: str) -> models.DayPass:
    """
    A pass is valid once, on its visit date. A pass checked after its visit
    date is marked Expired.
    """
    day_pass = await crud.day_pass.get_by_code(db, pass_code=pass_code)
    if not day_pass:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invalid pass code")
    if day_pass.status == DayPassStatus.USED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Pass has already been used")
    if day_pass.status == DayPassStatus.EXPIRED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Pass has expired")

    today = utc_now().date()
    visit_day = day_pass.visit_date.date()
    if visit_day < today:
        await crud.day_pass.update(db, db_obj=day_pass, obj_in={"status": DayPassStatus.EXPIRED})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Pass has expired")
    if visit_day > today:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Pass is only valid on {visit_day:%B %d, %Y}",
        )

    day_pass = await crud.day_pass.update(db, db_obj=day_pass, obj_in={"status": DayPassStatus.USED})
    logger.info(f"Day pass {day_pass.pass_code} verified.")
    return day_pass
