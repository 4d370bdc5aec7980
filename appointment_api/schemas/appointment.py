from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional

from ..models.appointment import AppointmentStatus
from ..utils.timezone import to_naive_utc


class AppointmentCreate(BaseModel):
    title: str
    description: Optional[str] = ""
    start_time: datetime
    end_time: datetime
    status: Optional[AppointmentStatus] = None

    @field_validator("title")
    @classmethod
    def title_trim(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("title is required")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, v):
        return "" if v is None else v

    @field_validator("start_time", "end_time")
    @classmethod
    def times_to_utc(cls, v: datetime):
        return to_naive_utc(v)


class AppointmentUpdate(BaseModel):
    """Partial update; only fields explicitly set are applied."""

    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[AppointmentStatus] = None

    @field_validator("title")
    @classmethod
    def title_trim(cls, v: Optional[str]):
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("title is required")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def times_to_utc(cls, v: Optional[datetime]):
        if v is None:
            return None
        return to_naive_utc(v)
