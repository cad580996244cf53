from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.db.session import get_db
from app import models, schemas, services
from app.dependencies import get_current_user

router = APIRouter()


@router.get("", response_model=List[schemas.Post])
async def list_posts(db: AsyncSession = Depends(get_db), _: models.User = Depends(get_current_user)):
    return await services.post_service.list_posts(db)


@router.post("", response_model=schemas.Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_in: schemas.PostCreate,
    db: AsyncSession = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return await services.post_service.create_post(db, post_in=post_in, current_user=current_user)


@router.delete("/{post_id}", response_model=schemas.Message)
async def delete_post(
    post_id: int, db: AsyncSession = Depends(get_db), current_user: models.User = Depends(get_current_user)
):
    await services.post_service.delete_post(db, post_id=post_id, current_user=current_user)
    return {"message": "Post removed"}


@router.post("/{post_id}/upvote", response_model=schemas.Post)
async def toggle_post_upvote(
    post_id: int, db: AsyncSession = Depends(get_db), current_user: models.User = Depends(get_current_user)
):
    return await services.post_service.toggle_upvote(db, post_id=post_id, current_user=current_user)


@router.post("/{post_id}/comments", response_model=schemas.Post, status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: int,
    comment_in: schemas.CommentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return await services.post_service.add_comment(
        db, post_id=post_id, comment_in=comment_in, current_user=current_user
    )


@router.post("/{post_id}/comments/{comment_id}/upvote", response_model=schemas.Post)
async def toggle_comment_upvote(
    post_id: int,
    comment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return await services.post_service.toggle_comment_upvote(
        db, post_id=post_id, comment_id=comment_id, current_user=current_user
    )


@router.delete("/{post_id}/comments/{comment_id}", response_model=schemas.Post)
async def delete_comment(
    post_id: int,
    comment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return await services.post_service.delete_comment(
        db, post_id=post_id, comment_id=comment_id, current_user=current_user
    )


@router.post("/{post_id}/comments/{comment_id}/replies", response_model=schemas.Post, status_code=status.HTTP_201_CREATED)
async def add_reply(
    post_id: int,
    comment_id: int,
    reply_in: schemas.CommentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return await services.post_service.add_reply(
        db, post_id=post_id, comment_id=comment_id, reply_in=reply_in, current_user=current_user
    )
