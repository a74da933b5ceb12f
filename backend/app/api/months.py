from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app import repositories
from app.api.days import to_read
from app.core.month_utils import MonthWindow, current_month, day_label
from app.core.reconcile import initial_weight, reconcile_month
from app.core.trend import compute_trend_slots
from app.db import get_db
from app.schemas.day import DayRow, MonthRead, TrendSlotsRead


router = APIRouter(prefix="/months", tags=["months"])


def _neighbour_key(step) -> Optional[str]:
    # no month before 0001-01 or after 9999-12
    try:
        return step().key
    except ValueError:
        return None


def build_month(db: Session, window: MonthWindow) -> MonthRead:
    """
    Load one month and lay it out as the grid the frontend renders.

    - Every calendar day appears, in order, even without a stored row.
    - The first day with a weight sets the reference for every trend strip.
    """
    rows = repositories.fetch_month(db, window)
    records = reconcile_month(window.year, window.month, rows)
    reference = initial_weight(records)

    days: list[DayRow] = []
    for record in records:
        trend = compute_trend_slots(reference, record)
        days.append(
            DayRow(
                label=day_label(record.date),
                record=to_read(record),
                trend=TrendSlotsRead(
                    slots=list(trend.slots),
                    active_index=trend.active_index,
                    clamped=trend.clamped,
                ),
            )
        )

    return MonthRead(
        key=window.key,
        label=window.label,
        year=window.year,
        month=window.month,
        prev=_neighbour_key(window.prev),
        next=_neighbour_key(window.next),
        days_in_month=window.days_in_month,
        initial_weight=float(reference),
        days=days,
    )


@router.get("/current", response_model=MonthRead)
def get_current_month(request: Request, db: Session = Depends(get_db)):
    window = current_month(request.app.state.settings.timezone)
    return build_month(db, window)


@router.get("/{key}", response_model=MonthRead)
def get_month(key: str, db: Session = Depends(get_db)):
    try:
        window = MonthWindow.parse(key)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return build_month(db, window)
