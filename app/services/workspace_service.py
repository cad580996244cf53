import logging
import uuid
from typing import List

from fastapi import HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import crud, models, schemas
from app.core.config import settings
from app.crud import crud_workspace
from app.utils.clock import utc_now
from app.utils.storage import gcs_storage

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/avif": "avif",
    "image/webp": "webp",
}


async def get_workspace_or_404(db: AsyncSession, workspace_id: int) -> models.Workspace:
    workspace = await crud_workspace.get_workspace(db, workspace_id=workspace_id)
    if not workspace:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found")
    return workspace


async def _ensure_user_exists(db: AsyncSession, user_id: int) -> None:
    if not await crud.crud_user.get_user_by_id(db, user_id=user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


async def create_workspace(db: AsyncSession, *, workspace_in: schemas.WorkspaceCreate) -> models.Workspace:
    if workspace_in.allotted_to_id is not None:
        await _ensure_user_exists(db, workspace_in.allotted_to_id)
    workspace = await crud_workspace.create_workspace(db, obj_in=workspace_in)
    logger.info(f"Workspace {workspace.id} created: {workspace.name} at {workspace.location}")
    return await get_workspace_or_404(db, workspace.id)


async def update_workspace(
    db: AsyncSession, *, workspace_id: int, workspace_in: schemas.WorkspaceUpdate
) -> models.Workspace:
    """
    Descriptive fields are applied directly. Allotment fields present in the
    request go through the same guarded allotment used by bookings: a
    workspace held by someone else yields 409, an explicit null occupant
    releases it.
    """
    workspace = await get_workspace_or_404(db, workspace_id)
    allotment_changes = workspace_in.model_fields_set & set(crud_workspace.ALLOTMENT_FIELDS)

    if allotment_changes:
        now = utc_now()
        if "allotted_to_id" in allotment_changes and workspace_in.allotted_to_id is None:
            await crud_workspace.release_workspace(db, workspace_id=workspace.id, now=now)
            logger.info(f"Workspace {workspace.id} released by admin.")
        else:
            occupant_id = workspace_in.allotted_to_id
            if "allotted_to_id" not in allotment_changes:
                occupant_id = workspace.allotted_to_id
            if occupant_id is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Allotted user is required to set an allotment window",
                )
            await _ensure_user_exists(db, occupant_id)
            start = workspace_in.allotment_start if "allotment_start" in allotment_changes else workspace.allotment_start
            end = workspace_in.allotment_end if "allotment_end" in allotment_changes else workspace.allotment_end
            if start and end and end < start:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Allotment end must be after start")
            allotted = await crud_workspace.try_allot_workspace(
                db,
                workspace_id=workspace.id,
                user_id=occupant_id,
                start=start or now,
                end=end,
                now=now,
                allow_same_occupant=True,
            )
            if not allotted:
                await db.rollback()
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Workspace is already allotted")

    await crud_workspace.update_workspace(db, workspace_obj=workspace, obj_in=workspace_in)
    return await get_workspace_or_404(db, workspace_id)


async def delete_workspace(db: AsyncSession, *, workspace_id: int) -> None:
    workspace = await get_workspace_or_404(db, workspace_id)
    images = list(workspace.images or [])
    await crud_workspace.delete_workspace(db, workspace_id=workspace_id)
    for blob_name in images:
        try:
            gcs_storage.delete_blob(blob_name)
        except Exception as e:
            logger.error(f"Failed to delete image {blob_name} of workspace {workspace_id}: {e}")


async def upload_workspace_images(
    db: AsyncSession, *, workspace_id: int, files: List[UploadFile]
) -> models.Workspace:
    """Replaces the workspace gallery with the uploaded images."""
    workspace = await get_workspace_or_404(db, workspace_id)
    if not files:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No images uploaded")
    if len(files) > settings.WORKSPACE_IMAGE_MAX_FILES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"You can upload up to {settings.WORKSPACE_IMAGE_MAX_FILES} images",
        )

    payloads = []
    for file in files:
        if file.content_type not in ALLOWED_IMAGE_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File type {file.content_type} not allowed. Use jpg, jpeg, png, avif or webp.",
            )
        content = await file.read()
        if len(content) > settings.WORKSPACE_IMAGE_MAX_BYTES:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{file.filename} exceeds the 5MB limit")
        payloads.append((file.content_type, content))

    uploaded = []
    try:
        for content_type, content in payloads:
            blob_name = f"workspaces/{workspace.id}/{uuid.uuid4()}.{ALLOWED_IMAGE_TYPES[content_type]}"
            uploaded.append(await gcs_storage.upload_bytes_async(content, blob_name, content_type))
    except ConnectionAbortedError:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Image storage is not configured")
    except Exception as e:
        logger.error(f"Image upload for workspace {workspace.id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not upload images")

    old_images = list(workspace.images or [])
    await crud_workspace.set_workspace_images(db, workspace_obj=workspace, images=uploaded)
    for blob_name in old_images:
        try:
            gcs_storage.delete_blob(blob_name)
        except Exception as e:
            logger.error(f"Failed to delete replaced image {blob_name}: {e}")
    return await get_workspace_or_404(db, workspace_id)


async def get_my_workspace(db: AsyncSession, *, current_user: models.User) -> models.Workspace:
    workspace = await crud_workspace.get_workspace_by_occupant(db, user_id=current_user.id)
    if not workspace or not workspace.is_allotted_at(utc_now()):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No workspace allotted")
    return workspace


async def get_community(db: AsyncSession, *, current_user: models.User) -> List[schemas.CommunityMember]:
    """Other current occupants at the caller's location."""
    now = utc_now()
    workspace = await crud_workspace.get_workspace_by_occupant(db, user_id=current_user.id)
    if not workspace or not workspace.is_allotted_at(now):
        return []
    neighbours = await crud_workspace.get_occupied_workspaces_at_location(
        db, location=workspace.location, exclude_user_id=current_user.id
    )
    return [
        schemas.CommunityMember(workspace_name=ws.name, user=schemas.UserSimple.model_validate(ws.allotted_to))
        for ws in neighbours
        if ws.allotted_to is not None and ws.is_allotted_at(now)
    ]
