import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app import models, schemas
from app.crud import crud_post

logger = logging.getLogger(__name__)


async def _get_post_or_404(db: AsyncSession, post_id: int) -> models.Post:
    post = await crud_post.get_post(db, post_id=post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def _get_comment_or_404(post: models.Post, comment_id: int) -> models.PostComment:
    comment = crud_post.find_comment(post, comment_id)
    if not comment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return comment


def _require_text(value, label: str) -> str:
    if not value or not value.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{label} is required")
    return value.strip()


async def list_posts(db: AsyncSession) -> List[models.Post]:
    return await crud_post.get_posts(db)


async def create_post(db: AsyncSession, *, post_in: schemas.PostCreate, current_user: models.User) -> models.Post:
    content = _require_text(post_in.content, "Content")
    return await crud_post.create_post(
        db, author_id=current_user.id, author_name=post_in.author_name or current_user.name, content=content
    )


async def delete_post(db: AsyncSession, *, post_id: int, current_user: models.User) -> None:
    post = await _get_post_or_404(db, post_id)
    if post.author_id != current_user.id and not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to delete this post")
    await crud_post.delete_post(db, post=post)
    logger.info(f"Post {post_id} deleted by user {current_user.id}")


async def toggle_upvote(db: AsyncSession, *, post_id: int, current_user: models.User) -> models.Post:
    post = await _get_post_or_404(db, post_id)
    return await crud_post.toggle_post_upvote(db, post=post, user_id=current_user.id)


async def add_comment(
    db: AsyncSession, *, post_id: int, comment_in: schemas.CommentCreate, current_user: models.User
) -> models.Post:
    text = _require_text(comment_in.text, "Comment text")
    post = await _get_post_or_404(db, post_id)
    return await crud_post.add_comment(
        db, post=post, user_id=current_user.id, user_name=comment_in.user_name or current_user.name, text=text
    )


async def toggle_comment_upvote(
    db: AsyncSession, *, post_id: int, comment_id: int, current_user: models.User
) -> models.Post:
    post = await _get_post_or_404(db, post_id)
    comment = _get_comment_or_404(post, comment_id)
    return await crud_post.toggle_comment_upvote(db, post=post, comment=comment, user_id=current_user.id)


async def delete_comment(
    db: AsyncSession, *, post_id: int, comment_id: int, current_user: models.User
) -> models.Post:
    post = await _get_post_or_404(db, post_id)
    comment = _get_comment_or_404(post, comment_id)
    if comment.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to delete this comment")
    return await crud_post.delete_comment(db, post=post, comment=comment)


async def add_reply(
    db: AsyncSession, *, post_id: int, comment_id: int, reply_in: schemas.CommentCreate, current_user: models.User
) -> models.Post:
    text = _require_text(reply_in.text, "Reply text")
    post = await _get_post_or_404(db, post_id)
    comment = _get_comment_or_404(post, comment_id)
    return await crud_post.add_reply(
        db, post=post, comment=comment, user_id=current_user.id,
        user_name=reply_in.user_name or current_user.name, text=text,
    )
