from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, JSON
from sqlalchemy.orm import relationship, Mapped, mapped_column
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from decimal import Decimal

from app.db.base_class import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User

DEFAULT_AMENITIES = ["High-speed WiFi", "Coffee Bar"]


class Workspace(TimestampMixin, Base):
    __tablename__ = 'workspaces'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, index=True, nullable=False)
    location: Mapped[str] = mapped_column(String, index=True, nullable=False)
    floor: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    type: Mapped[str] = mapped_column(String, nullable=False)
    capacity: Mapped[str] = mapped_column(String, nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    price_label: Mapped[str] = mapped_column(String, default="Contact for Pricing")
    amenities: Mapped[List[str]] = mapped_column(JSON, default=lambda: list(DEFAULT_AMENITIES))
    images: Mapped[List[str]] = mapped_column(JSON, default=list)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    has_conference_hall: Mapped[bool] = mapped_column(Boolean, default=False)
    has_cabin: Mapped[bool] = mapped_column(Boolean, default=False)

    allotted_to_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    allotment_start: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    allotment_end: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    allotted_to: Mapped[Optional["User"]] = relationship(back_populates="allotted_workspaces", lazy="selectin")

    def is_allotted_at(self, moment: datetime) -> bool:
        """An allotment with no end date is open-ended."""
        if self.allotted_to_id is None:
            return False
        return self.allotment_end is None or self.allotment_end >= moment

    def __repr__(self) -> str:
        return f"<Workspace(id={self.id}, name='{self.name}')>"
