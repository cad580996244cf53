from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select

from app import security
from app.models import User, Workspace
from app.models.enums import UserRole, UserStatus
from app.utils.clock import utc_now

DEFAULT_PASSWORD = "secret123"


async def create_user(
    db,
    *,
    email: str,
    name: str = "Test User",
    role: UserRole = UserRole.MEMBER,
    status: UserStatus = UserStatus.ACTIVE,
    password: str = DEFAULT_PASSWORD,
    mobile: Optional[str] = None,
) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=security.get_password_hash(password),
        role=role,
        status=status,
        mobile=mobile,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def create_workspace(db, **overrides) -> Workspace:
    data = {
        "name": "Desk A",
        "location": "Indiranagar Hub",
        "floor": "2",
        "type": "Dedicated Desk",
        "capacity": "1 seat",
        "base_price": Decimal("1000"),
    }
    data.update(overrides)
    workspace = Workspace(**data)
    db.add(workspace)
    await db.commit()
    await db.refresh(workspace)
    return workspace


async def count_rows(db, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {security.create_user_token(user)}"}


def future_start(days: int = 1) -> datetime:
    return (utc_now() + timedelta(days=days)).replace(microsecond=0)


def booking_payload(workspace_id: int, **overrides) -> dict:
    payload = {
        "fullName": "Asha Rao",
        "email": "asha@example.com",
        "contactNumber": "+91 98765 43210",
        "firmName": "Rao Studio",
        "duration": "3 months",
        "startDate": future_start().isoformat(),
        "workspaceId": workspace_id,
        "workspaceName": "Desk A",
        "paymentMethod": "Pay Now",
    }
    payload.update(overrides)
    return payload
