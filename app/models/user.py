from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Integer, String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

if TYPE_CHECKING:
    from .workspace import Workspace
    from .post import Post

from app.db.base_class import Base, TimestampMixin
from app.utils.clock import utc_now
from .enums import UserRole, UserStatus


def _joined_date() -> str:
    return utc_now().strftime("%b %d, %Y")


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    mobile: Mapped[Optional[str]] = mapped_column(String, unique=True, nullable=True)
    organization: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role_enum"),
        default=UserRole.MEMBER,
        nullable=False,
    )
    status: Mapped[UserStatus] = mapped_column(
        SQLEnum(UserStatus, name="user_status_enum"),
        default=UserStatus.PENDING,
        nullable=False,
        index=True,
    )
    joined_date: Mapped[str] = mapped_column(String, default=_joined_date)
    last_active: Mapped[str] = mapped_column(String, default="Just now")

    allotted_workspaces: Mapped[List["Workspace"]] = relationship(back_populates="allotted_to", passive_deletes=True)
    posts: Mapped[List["Post"]] = relationship(back_populates="author", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
