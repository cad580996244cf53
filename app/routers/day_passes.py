from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.db.session import get_db
from app import models, schemas, services
from app.dependencies import get_current_user_with_roles
from app.models.enums import UserRole

router = APIRouter()

require_pass_checker = get_current_user_with_roles([UserRole.ADMIN, UserRole.AUTHENTICATOR])


@router.post("", response_model=schemas.DayPassResponse, status_code=status.HTTP_201_CREATED)
async def create_day_pass(
    pass_in: schemas.DayPassCreate, background_tasks: BackgroundTasks, db: AsyncSession = Depends(get_db)
):
    """Issues a day pass; the QR code is emailed after the response."""
    day_pass = await services.day_pass_service.create_day_pass(
        db, pass_in=pass_in, background_tasks=background_tasks
    )
    return {"success": True, "message": "Day pass created successfully", "data": day_pass}


@router.get("", response_model=List[schemas.DayPass])
async def list_day_passes(db: AsyncSession = Depends(get_db), _: models.User = Depends(require_pass_checker)):
    return await services.day_pass_service.list_day_passes(db)


@router.get("/verify/{pass_code}", response_model=schemas.DayPassResponse)
async def verify_day_pass(
    pass_code: str, db: AsyncSession = Depends(get_db), _: models.User = Depends(require_pass_checker)
):
    day_pass = await services.day_pass_service.verify_day_pass(db, pass_code=pass_code)
    return {"success": True, "message": "Pass verified successfully", "data": day_pass}
