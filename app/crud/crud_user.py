from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
import logging
from typing import List, Optional, Dict, Any

from app.models.user import User
from app.models.enums import UserRole, UserStatus
from app.security import get_password_hash

logger = logging.getLogger(__name__)


async def get_user_by_id(db: AsyncSession, *, user_id: int) -> User | None:
    logger.debug(f"Fetching user by ID: {user_id}")
    result = await db.execute(select(User).filter(User.id == user_id))
    user = result.scalars().first()
    if not user:
        logger.warning(f"User with ID {user_id} not found.")
    return user


async def get_user_by_email(db: AsyncSession, *, email: str) -> User | None:
    """Case-insensitive match on the stored email."""
    logger.debug(f"Fetching user by email: {email}")
    result = await db.execute(select(User).filter(func.lower(User.email) == email.strip().lower()))
    user = result.scalars().first()
    if not user:
        logger.debug(f"User with email {email} not found.")
    return user


async def get_user_by_mobile(db: AsyncSession, *, mobile: str) -> User | None:
    result = await db.execute(select(User).filter(User.mobile == mobile))
    return result.scalars().first()


async def get_users(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[User]:
    result = await db.execute(
        select(User).order_by(User.created_at.desc(), User.id.desc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


async def count_users(db: AsyncSession, *, status: Optional[UserStatus] = None) -> int:
    stmt = select(func.count()).select_from(User)
    if status is not None:
        stmt = stmt.where(User.status == status)
    result = await db.execute(stmt)
    return result.scalar_one()


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.MEMBER,
    mobile: Optional[str] = None,
    organization: Optional[str] = None,
) -> User:
    db_user = User(
        name=name,
        email=email.strip().lower(),
        hashed_password=get_password_hash(password),
        role=role,
        mobile=mobile or None,
        organization=organization,
        status=UserStatus.PENDING,
    )
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)
    logger.info(f"Created user {db_user.id} ({db_user.email}) with role {role.value}.")
    return db_user


async def update_user(db: AsyncSession, *, db_obj: User, update_data: Dict[str, Any]) -> User:
    logger.info(f"Updating user {db_obj.id}. Fields: {sorted(update_data)}")
    for field, value in update_data.items():
        if field == "password":
            db_obj.hashed_password = get_password_hash(value)
        elif hasattr(db_obj, field):
            setattr(db_obj, field, value)
    db.add(db_obj)
    try:
        await db.commit()
        await db.refresh(db_obj)
        return db_obj
    except Exception as e:
        await db.rollback()
        logger.error(f"Database error during update for user {db_obj.id}: {e}", exc_info=True)
        raise


async def delete_user(db: AsyncSession, *, user: User) -> None:
    logger.info(f"Deleting user {user.id}")
    await db.delete(user)
    await db.commit()
