from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.core.trend import SlotState


class DayRecordRead(BaseModel):
    """A stored day, or a placeholder for a day nobody has filled in."""

    date: date
    weight: Optional[float] = None
    comment: Optional[str] = None
    persisted: bool = False


class DayRecordUpsert(BaseModel):
    # Numeric(6, 2) column: finite, 0 < weight < 10000
    weight: Optional[float] = Field(default=None, gt=0, lt=10000, allow_inf_nan=False)
    comment: Optional[str] = None

    # Blank comments are stored as NULL
    @field_validator("comment", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


class TrendSlotsRead(BaseModel):
    slots: list[SlotState]
    active_index: Optional[int] = None
    clamped: bool = False


class DayRow(BaseModel):
    label: str  # '1st', '2nd', ...
    record: DayRecordRead
    trend: TrendSlotsRead


class MonthRead(BaseModel):
    """Schema returned to the frontend for one month grid."""

    key: str    # 'YYYY-MM'
    label: str  # 'October 2026'
    year: int
    month: int
    prev: Optional[str] = None  # null at 0001-01
    next: Optional[str] = None  # null at 9999-12
    days_in_month: int
    initial_weight: float
    days: list[DayRow]
