from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from typing import List
import logging

from app import crud, models, schemas, security
from app.utils.validation import validate_email, validate_mobile, validate_password

logger = logging.getLogger(__name__)


async def _check_contact_details(db: AsyncSession, user: models.User, data: dict) -> None:
    """Format and uniqueness checks for an email/mobile change."""
    email = data.get("email")
    if email is not None and email.lower() != user.email.lower():
        if not validate_email(email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email format")
        if await crud.crud_user.get_user_by_email(db, email=email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already in use")
        data["email"] = email.strip().lower()
    mobile = data.get("mobile")
    if mobile and mobile != user.mobile:
        if not validate_mobile(mobile):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid mobile number format")
        if await crud.crud_user.get_user_by_mobile(db, mobile=mobile):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Mobile number already registered")


async def update_profile(
    db: AsyncSession, *, current_user: models.User, update_in: schemas.UserProfileUpdate
) -> models.User:
    """A password change requires the current password."""
    data = update_in.model_dump(exclude_unset=True, exclude_none=True)
    old_password = data.pop("old_password", None)

    if "password" in data:
        if not old_password or not security.verify_password(old_password, current_user.hashed_password):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
        if not validate_password(data["password"]):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password must be at least 6 characters")

    await _check_contact_details(db, current_user, data)
    return await crud.crud_user.update_user(db, db_obj=current_user, update_data=data)


async def list_users(db: AsyncSession) -> List[models.User]:
    return await crud.crud_user.get_users(db, limit=500)


async def admin_update_user(
    db: AsyncSession, *, user_id: int, update_in: schemas.UserAdminUpdate
) -> models.User:
    user = await crud.crud_user.get_user_by_id(db, user_id=user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    data = update_in.model_dump(exclude_unset=True, exclude_none=True)
    await _check_contact_details(db, user, data)
    return await crud.crud_user.update_user(db, db_obj=user, update_data=data)


async def delete_user(db: AsyncSession, *, user_id: int, current_user: models.User) -> None:
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    user = await crud.crud_user.get_user_by_id(db, user_id=user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    await crud.crud_user.delete_user(db, user=user)
