from __future__ import annotations
import datetime
from typing import Optional, List

from sqlalchemy import select, update, func, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.workspace import Workspace
from app.schemas.workspace import WorkspaceCreate, WorkspaceUpdate
from app.utils.clock import utc_now

import logging
logger = logging.getLogger(__name__)

ALLOTMENT_FIELDS = ("allotted_to_id", "allotment_start", "allotment_end")


async def create_workspace(db: AsyncSession, *, obj_in: WorkspaceCreate) -> Workspace:
    logger.info(f"Creating new workspace: {obj_in.name}")
    db_obj = Workspace(**obj_in.model_dump())
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def get_workspace(db: AsyncSession, workspace_id: int) -> Optional[Workspace]:
    """Always reads the persisted row, so price changes are seen immediately."""
    result = await db.execute(
        select(Workspace)
        .filter(Workspace.id == workspace_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_workspaces(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Workspace]:
    logger.debug(f"Fetching list of workspaces with skip={skip}, limit={limit}")
    stmt = (
        select(Workspace)
        .order_by(Workspace.created_at.desc(), Workspace.id.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_workspace_by_occupant(db: AsyncSession, *, user_id: int) -> Optional[Workspace]:
    result = await db.execute(
        select(Workspace)
        .filter(Workspace.allotted_to_id == user_id)
        .order_by(Workspace.allotment_start.desc())
    )
    return result.scalars().first()


async def get_occupied_workspaces_at_location(
    db: AsyncSession, *, location: str, exclude_user_id: int
) -> List[Workspace]:
    result = await db.execute(
        select(Workspace)
        .filter(
            Workspace.location == location,
            Workspace.allotted_to_id.is_not(None),
            Workspace.allotted_to_id != exclude_user_id,
        )
        .order_by(Workspace.name)
    )
    return list(result.scalars().all())


async def count_allotted_workspaces(db: AsyncSession, *, now: Optional[datetime.datetime] = None) -> int:
    now = now or utc_now()
    result = await db.execute(
        select(func.count())
        .select_from(Workspace)
        .where(
            Workspace.allotted_to_id.is_not(None),
            or_(Workspace.allotment_end.is_(None), Workspace.allotment_end >= now),
        )
    )
    return result.scalar_one()


async def update_workspace(
    db: AsyncSession, *, workspace_obj: Workspace, obj_in: WorkspaceUpdate
) -> Workspace:
    """Updates descriptive fields only; allotment changes go through allot/release."""
    logger.info(f"Updating workspace ID: {workspace_obj.id}")
    update_data = obj_in.model_dump(exclude_unset=True, exclude=set(ALLOTMENT_FIELDS))

    for field, value in update_data.items():
        if hasattr(workspace_obj, field):
            setattr(workspace_obj, field, value)
            logger.debug(f"Workspace {workspace_obj.id}: Set {field} to {value}")

    db.add(workspace_obj)
    try:
        await db.commit()
        await db.refresh(workspace_obj)
        return workspace_obj
    except Exception as e:
        await db.rollback()
        logger.error(f"Database error updating workspace {workspace_obj.id}: {e}", exc_info=True)
        raise


async def set_workspace_images(db: AsyncSession, *, workspace_obj: Workspace, images: List[str]) -> Workspace:
    workspace_obj.images = list(images)
    db.add(workspace_obj)
    await db.commit()
    await db.refresh(workspace_obj)
    return workspace_obj


async def delete_workspace(db: AsyncSession, *, workspace_id: int) -> bool:
    """Deletes a workspace. Returns True if deleted, False otherwise."""
    logger.info(f"Attempting to delete workspace ID: {workspace_id}")
    workspace = await get_workspace(db, workspace_id=workspace_id)
    if not workspace:
        logger.warning(f"Delete failed: Workspace with ID {workspace_id} not found.")
        return False

    await db.delete(workspace)
    await db.commit()
    logger.info(f"Workspace ID: {workspace_id} deleted successfully.")
    return True


async def try_allot_workspace(
    db: AsyncSession,
    *,
    workspace_id: int,
    user_id: int,
    start: Optional[datetime.datetime],
    end: Optional[datetime.datetime],
    now: datetime.datetime,
    allow_same_occupant: bool = False,
) -> bool:
    """
    Compare-and-swap on the allotment columns. The row is only written when the
    workspace is free: no occupant, or an allotment window that ended before
    `now`. Returns False when another occupant holds it.

    Does not commit; the caller owns the transaction.
    """
    free = [
        Workspace.allotted_to_id.is_(None),
        and_(Workspace.allotment_end.is_not(None), Workspace.allotment_end < now),
    ]
    if allow_same_occupant:
        free.append(Workspace.allotted_to_id == user_id)

    stmt = (
        update(Workspace)
        .where(Workspace.id == workspace_id, or_(*free))
        .values(allotted_to_id=user_id, allotment_start=start, allotment_end=end, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    allotted = result.rowcount == 1
    if allotted:
        logger.info(f"Workspace {workspace_id} allotted to user {user_id} until {end}.")
    else:
        logger.warning(f"Allotment of workspace {workspace_id} to user {user_id} rejected: already allotted.")
    return allotted


async def release_workspace(
    db: AsyncSession,
    *,
    workspace_id: int,
    now: datetime.datetime,
    occupant_id: Optional[int] = None,
    allotment_end: Optional[datetime.datetime] = None,
) -> bool:
    """
    Clears the allotment. With `occupant_id` (and `allotment_end`) the release
    only happens while that user still holds the workspace for that window.
    Does not commit.
    """
    criteria = [Workspace.id == workspace_id]
    if occupant_id is not None:
        criteria.append(Workspace.allotted_to_id == occupant_id)
    if allotment_end is not None:
        criteria.append(Workspace.allotment_end == allotment_end)
    stmt = (
        update(Workspace)
        .where(*criteria)
        .values(allotted_to_id=None, allotment_start=None, allotment_end=None, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.rowcount == 1
