from dataclasses import dataclass
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app import models, schemas, security
from app.core.config import settings
from app.crud import crud_user
from app.db.session import get_db
from app.models.enums import UserRole, UserStatus


oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/users/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/users/login", auto_error=False)


async def _user_from_token(db: AsyncSession, token: str) -> Optional[models.User]:
    try:
        payload = security.decode_access_token(token)
        token_data = schemas.TokenPayload(**payload)
    except (JWTError, ValidationError):
        return None
    if token_data.user_id is None:
        return None
    return await crud_user.get_user_by_id(db, user_id=token_data.user_id)


async def get_current_user(
    db: AsyncSession = Depends(get_db), token: str = Depends(oauth2_scheme)
) -> models.User:
    user = await _user_from_token(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token failed",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if user.status == UserStatus.INACTIVE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is inactive")
    return user


async def get_optional_current_user(
    db: AsyncSession = Depends(get_db), token: Optional[str] = Depends(optional_oauth2_scheme)
) -> Optional[models.User]:
    """Public endpoints: the caller when a valid token is sent, otherwise None."""
    if not token:
        return None
    user = await _user_from_token(db, token)
    if user is None or user.status == UserStatus.INACTIVE:
        return None
    return user


def get_current_user_with_roles(required_roles: List[UserRole]):
    async def role_checker(current_user: models.User = Depends(get_current_user)) -> models.User:
        if current_user.role not in required_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not authorized. Requires one of: {', '.join(role.value for role in required_roles)}",
            )
        return current_user
    return role_checker


require_admin = get_current_user_with_roles([UserRole.ADMIN])


@dataclass(frozen=True)
class RecordScope:
    """Which booking/invoice records a caller may list: all of them, or their own by email."""
    owner_email: Optional[str] = None

    @property
    def is_unrestricted(self) -> bool:
        return self.owner_email is None

    @classmethod
    def for_user(cls, user: models.User) -> "RecordScope":
        if user.is_admin:
            return cls()
        return cls(owner_email=user.email)

    def permits(self, email: Optional[str]) -> bool:
        if self.owner_email is None:
            return True
        return bool(email) and email.lower() == self.owner_email.lower()


async def get_record_scope(current_user: models.User = Depends(get_current_user)) -> RecordScope:
    return RecordScope.for_user(current_user)
