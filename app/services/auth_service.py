import logging
from typing import Optional, Tuple

from fastapi import BackgroundTasks, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import crud, models, schemas, security
from app.models.enums import UserRole, UserStatus
from app.utils.email import send_welcome_email
from app.utils.validation import check_required_fields, validate_email, validate_mobile, validate_password

logger = logging.getLogger(__name__)


async def authenticate(db: AsyncSession, *, login_in: schemas.UserLogin) -> Tuple[models.User, str]:
    if not login_in.email or not login_in.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password are required")
    if not validate_email(login_in.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email format")

    user = await crud.crud_user.get_user_by_email(db, email=login_in.email)
    if not user or not security.verify_password(login_in.password, user.hashed_password):
        logger.warning(f"Failed login attempt for {login_in.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    if user.status == UserStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive. Please contact the administrator.",
        )

    update_data = {"last_active": "Just now"}
    if user.status == UserStatus.PENDING:
        update_data["status"] = UserStatus.ACTIVE
        logger.info(f"User {user.id} activated on first login.")
    user = await crud.crud_user.update_user(db, db_obj=user, update_data=update_data)
    return user, security.create_user_token(user)


async def register_user(
    db: AsyncSession,
    *,
    user_in: schemas.UserCreate,
    background_tasks: BackgroundTasks,
    current_user: Optional[models.User] = None,
) -> Tuple[models.User, str]:
    """
    Creates a member account. Only an admin caller may pick another role.
    The welcome email is sent after the response and never fails registration.
    """
    missing = check_required_fields(user_in.model_dump(), ("name", "email", "password"))
    if missing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=missing)
    if not validate_email(user_in.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email format")
    if not validate_password(user_in.password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password must be at least 6 characters")
    if user_in.mobile and not validate_mobile(user_in.mobile):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid mobile number format")

    if await crud.crud_user.get_user_by_email(db, email=user_in.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    if user_in.mobile and await crud.crud_user.get_user_by_mobile(db, mobile=user_in.mobile):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Mobile number already registered")

    role = UserRole.MEMBER
    if user_in.role and current_user is not None and current_user.is_admin:
        role = user_in.role

    user = await crud.crud_user.create_user(
        db,
        name=user_in.name.strip(),
        email=user_in.email,
        password=user_in.password,
        role=role,
        mobile=user_in.mobile,
        organization=user_in.organization,
    )
    background_tasks.add_task(send_welcome_email, user.email, user.name)
    return user, security.create_user_token(user)
