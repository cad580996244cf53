from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.db.session import get_db
from app import models, schemas, services
from app.crud import crud_workspace
from app.dependencies import get_current_user, require_admin

router = APIRouter()


@router.get("", response_model=List[schemas.Workspace])
async def list_workspaces(db: AsyncSession = Depends(get_db)):
    """All workspaces, newest first, with the current occupant."""
    return await crud_workspace.get_workspaces(db, limit=500)


@router.get("/my-workspace", response_model=schemas.Workspace)
async def read_my_workspace(
    db: AsyncSession = Depends(get_db), current_user: models.User = Depends(get_current_user)
):
    return await services.workspace_service.get_my_workspace(db, current_user=current_user)


@router.get("/community", response_model=List[schemas.CommunityMember])
async def read_community(
    db: AsyncSession = Depends(get_db), current_user: models.User = Depends(get_current_user)
):
    """Members occupying other workspaces at the caller's location."""
    return await services.workspace_service.get_community(db, current_user=current_user)


@router.get("/{workspace_id}", response_model=schemas.Workspace)
async def read_workspace(workspace_id: int, db: AsyncSession = Depends(get_db)):
    return await services.workspace_service.get_workspace_or_404(db, workspace_id)


@router.post("", response_model=schemas.Workspace, status_code=status.HTTP_201_CREATED)
async def create_workspace(
    workspace_in: schemas.WorkspaceCreate,
    db: AsyncSession = Depends(get_db),
    _: models.User = Depends(require_admin),
):
    return await services.workspace_service.create_workspace(db, workspace_in=workspace_in)


@router.put("/{workspace_id}", response_model=schemas.Workspace)
async def update_workspace(
    workspace_id: int,
    workspace_in: schemas.WorkspaceUpdate,
    db: AsyncSession = Depends(get_db),
    _: models.User = Depends(require_admin),
):
    return await services.workspace_service.update_workspace(
        db, workspace_id=workspace_id, workspace_in=workspace_in
    )


@router.delete("/{workspace_id}", response_model=schemas.Message)
async def delete_workspace(
    workspace_id: int,
    db: AsyncSession = Depends(get_db),
    _: models.User = Depends(require_admin),
):
    await services.workspace_service.delete_workspace(db, workspace_id=workspace_id)
    return {"message": "Workspace removed"}


@router.post("/{workspace_id}/images", response_model=schemas.Workspace)
async def upload_workspace_images(
    workspace_id: int,
    images: List[UploadFile] = File(...),
    db: AsyncSession = Depends(get_db),
    _: models.User = Depends(require_admin),
):
    return await services.workspace_service.upload_workspace_images(
        db, workspace_id=workspace_id, files=images
    )
