from sqlalchemy import Integer, String, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship, Mapped, mapped_column
from typing import List, TYPE_CHECKING

from app.db.base_class import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Post(TimestampMixin, Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    author_name: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # user ids, as strings
    upvotes: Mapped[List[str]] = mapped_column(JSON, default=list)

    author: Mapped["User"] = relationship(back_populates="posts")
    comments: Mapped[List["PostComment"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostComment.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, author_id={self.author_id})>"


class PostComment(TimestampMixin, Base):
    __tablename__ = "post_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user_name: Mapped[str] = mapped_column(String, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    upvotes: Mapped[List[str]] = mapped_column(JSON, default=list)

    post: Mapped["Post"] = relationship(back_populates="comments")
    replies: Mapped[List["CommentReply"]] = relationship(
        back_populates="comment",
        cascade="all, delete-orphan",
        order_by="CommentReply.id",
        lazy="selectin",
    )


class CommentReply(TimestampMixin, Base):
    __tablename__ = "comment_replies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    comment_id: Mapped[int] = mapped_column(ForeignKey("post_comments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user_name: Mapped[str] = mapped_column(String, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    comment: Mapped["PostComment"] = relationship(back_populates="replies")
