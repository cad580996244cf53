from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.db.session import get_db
from app import models, schemas, services
from app.dependencies import get_current_user, get_optional_current_user, require_admin

router = APIRouter()


def _with_token(user: models.User, token: str) -> schemas.UserWithToken:
    return schemas.UserWithToken(**schemas.User.model_validate(user).model_dump(), token=token)


@router.post("/login", response_model=schemas.UserWithToken)
async def login(login_in: schemas.UserLogin, db: AsyncSession = Depends(get_db)):
    """Authenticate with email and password. First login activates a pending account."""
    user, token = await services.auth_service.authenticate(db, login_in=login_in)
    return _with_token(user, token)


@router.post("", response_model=schemas.UserWithToken, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_in: schemas.UserCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[models.User] = Depends(get_optional_current_user),
):
    user, token = await services.auth_service.register_user(
        db, user_in=user_in, background_tasks=background_tasks, current_user=current_user
    )
    return _with_token(user, token)


@router.get("/profile", response_model=schemas.User)
async def read_profile(current_user: models.User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=schemas.User)
async def update_profile(
    update_in: schemas.UserProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return await services.user_service.update_profile(db, current_user=current_user, update_in=update_in)


@router.get("", response_model=List[schemas.User])
async def list_users(db: AsyncSession = Depends(get_db), _: models.User = Depends(require_admin)):
    return await services.user_service.list_users(db)


@router.put("/{user_id}", response_model=schemas.User)
async def update_user(
    user_id: int,
    update_in: schemas.UserAdminUpdate,
    db: AsyncSession = Depends(get_db),
    _: models.User = Depends(require_admin),
):
    return await services.user_service.admin_update_user(db, user_id=user_id, update_in=update_in)


@router.delete("/{user_id}", response_model=schemas.Message)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: models.User = Depends(require_admin),
):
    await services.user_service.delete_user(db, user_id=user_id, current_user=current_user)
    return {"message": "User removed"}
