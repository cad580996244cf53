from datetime import datetime
from typing import List, Optional

from .common import CamelModel


class PostCreate(CamelModel):
    content: Optional[str] = None
    author_name: Optional[str] = None


class CommentCreate(CamelModel):
    text: Optional[str] = None
    user_name: Optional[str] = None


class Reply(CamelModel):
    id: int
    user_id: int
    user_name: str
    text: str
    created_at: datetime


class Comment(CamelModel):
    id: int
    user_id: int
    user_name: str
    text: str
    upvotes: List[str] = []
    replies: List[Reply] = []
    created_at: datetime


class Post(CamelModel):
    id: int
    author_id: int
    author_name: str
    content: str
    upvotes: List[str] = []
    comments: List[Comment] = []
    created_at: datetime
    updated_at: datetime
