from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional
from datetime import datetime

from app.db.base_class import Base, TimestampMixin
from app.models.enums import RequestStatus, VisitStatus


class VisitRequest(TimestampMixin, Base):
    __tablename__ = "visit_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    workspace_id: Mapped[Optional[int]] = mapped_column(ForeignKey("workspaces.id", ondelete="SET NULL"), nullable=True)
    workspace_name: Mapped[str] = mapped_column(String, nullable=False)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    contact_number: Mapped[str] = mapped_column(String, nullable=False)
    visit_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[VisitStatus] = mapped_column(
        SQLAlchemyEnum(VisitStatus, name="visit_status_enum"), default=VisitStatus.PENDING, nullable=False
    )


class QuoteRequest(TimestampMixin, Base):
    __tablename__ = "quote_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    work_email: Mapped[str] = mapped_column(String, nullable=False)
    contact_number: Mapped[str] = mapped_column(String, nullable=False)
    firm_name: Mapped[str] = mapped_column(String, nullable=False)
    firm_type: Mapped[str] = mapped_column(String, nullable=False)
    required_workspace: Mapped[str] = mapped_column(String, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    duration: Mapped[str] = mapped_column(String, nullable=False)
    additional_requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[RequestStatus] = mapped_column(
        SQLAlchemyEnum(RequestStatus, name="request_status_enum"), default=RequestStatus.PENDING, nullable=False, index=True
    )


class ContactRequest(TimestampMixin, Base):
    __tablename__ = "contact_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    subject: Mapped[str] = mapped_column(String, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[RequestStatus] = mapped_column(
        SQLAlchemyEnum(RequestStatus, name="request_status_enum"), default=RequestStatus.PENDING, nullable=False
    )
