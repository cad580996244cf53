from sqlalchemy import Integer, String, DateTime, Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime

from app.db.base_class import Base, TimestampMixin
from app.models.enums import DayPassStatus


class DayPass(TimestampMixin, Base):
    __tablename__ = "day_passes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    contact: Mapped[str] = mapped_column(String, nullable=False)
    purpose: Mapped[str] = mapped_column(String, nullable=False)
    visit_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    pass_code: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    status: Mapped[DayPassStatus] = mapped_column(
        SQLAlchemyEnum(DayPassStatus, name="day_pass_status_enum"), default=DayPassStatus.PENDING, nullable=False
    )

    def __repr__(self) -> str:
        return f"<DayPass(pass_code='{self.pass_code}', status='{self.status.value}')>"
