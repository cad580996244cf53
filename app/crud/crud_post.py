import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.post import Post, PostComment, CommentReply

logger = logging.getLogger(__name__)


async def get_posts(db: AsyncSession, skip: int = 0, limit: int = 50) -> List[Post]:
    result = await db.execute(
        select(Post).order_by(Post.created_at.desc(), Post.id.desc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


async def get_post(db: AsyncSession, *, post_id: int) -> Optional[Post]:
    result = await db.execute(
        select(Post).where(Post.id == post_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_post(db: AsyncSession, *, author_id: int, author_name: str, content: str) -> Post:
    post = Post(author_id=author_id, author_name=author_name, content=content, upvotes=[], comments=[])
    db.add(post)
    await db.commit()
    logger.info(f"User {author_id} created post {post.id}")
    return await get_post(db, post_id=post.id)


async def delete_post(db: AsyncSession, *, post: Post) -> None:
    await db.delete(post)
    await db.commit()


def _toggle(values: List[str], user_id: int) -> List[str]:
    # JSON columns need a new list to register the change
    key = str(user_id)
    return [v for v in values if v != key] if key in values else [*values, key]


async def toggle_post_upvote(db: AsyncSession, *, post: Post, user_id: int) -> Post:
    post.upvotes = _toggle(post.upvotes or [], user_id)
    await db.commit()
    return await get_post(db, post_id=post.id)


def find_comment(post: Post, comment_id: int) -> Optional[PostComment]:
    return next((c for c in post.comments if c.id == comment_id), None)


async def add_comment(db: AsyncSession, *, post: Post, user_id: int, user_name: str, text: str) -> Post:
    db.add(PostComment(post_id=post.id, user_id=user_id, user_name=user_name, text=text, upvotes=[], replies=[]))
    await db.commit()
    return await get_post(db, post_id=post.id)


async def toggle_comment_upvote(db: AsyncSession, *, post: Post, comment: PostComment, user_id: int) -> Post:
    comment.upvotes = _toggle(comment.upvotes or [], user_id)
    await db.commit()
    return await get_post(db, post_id=post.id)


async def delete_comment(db: AsyncSession, *, post: Post, comment: PostComment) -> Post:
    await db.delete(comment)
    await db.commit()
    return await get_post(db, post_id=post.id)


async def add_reply(
    db: AsyncSession, *, post: Post, comment: PostComment, user_id: int, user_name: str, text: str
) -> Post:
    db.add(CommentReply(comment_id=comment.id, user_id=user_id, user_name=user_name, text=text))
    await db.commit()
    return await get_post(db, post_id=post.id)
