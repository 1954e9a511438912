from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.schemas.base import CamelModel, coerce_calendar_date
from app.utils.time import add_one_month


def check_renewable_end_date(value: Optional[date]) -> Optional[date]:
    """Reject end dates whose next payment date would fall past date.max."""
    if value is None:
        return value
    try:
        add_one_month(value)
    except (ValueError, OverflowError):
        raise ValueError("endDate is too late to schedule a next payment") from None
    return value


class StudentCreate(CamelModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    meals: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    total_amount: float
    paid_amount: float

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return coerce_calendar_date(v)

    @field_validator("end_date")
    @classmethod
    def end_date_has_next_payment(cls, v):
        return check_renewable_end_date(v)


class StudentUpdate(CamelModel):
    """
    Partial update. Only these fields can be changed; anything else in the
    body is ignored. Null values count as "not supplied".
    """
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    meals: Optional[str] = Field(None, min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_amount: Optional[float] = None
    paid_amount: Optional[float] = None
    pending_amount: Optional[float] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return coerce_calendar_date(v)

    @field_validator("end_date")
    @classmethod
    def end_date_has_next_payment(cls, v):
        return check_renewable_end_date(v)


class StudentResponse(CamelModel):
    id: UUID
    vendor_id: UUID
    name: str
    phone: str
    meals: str
    total_amount: float
    paid_amount: float
    pending_amount: float
    start_date: date
    end_date: date
    next_payment_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime
