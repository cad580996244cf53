from pydantic import EmailStr, Field
from datetime import datetime

from app.models.enums import DayPassStatus
from .common import CamelModel


class DayPassCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    contact: str = Field(..., min_length=1)
    purpose: str = Field(..., min_length=1)
    visit_date: datetime


class DayPass(CamelModel):
    id: int
    name: str
    email: str
    contact: str
    purpose: str
    visit_date: datetime
    pass_code: str
    status: DayPassStatus
    created_at: datetime


class DayPassResponse(CamelModel):
    success: bool = True
    message: str
    data: DayPass
