"""Month reconciliation.

Stored rows are sparse: a day only gets a row once a weight or comment is
entered for it. The month view needs one row per calendar day, so missing
days are filled with transient placeholders that are never added to a session.
"""
from typing import Iterable

from app.core.constants import DEFAULT_INITIAL_WEIGHT
from app.core.month_utils import MonthWindow
from app.models.day_record import DayRecord


def placeholder(day) -> DayRecord:
    return DayRecord(date=day, weight=None, comment=None)


def reconcile_month(year: int, month: int, records: Iterable[DayRecord]) -> list[DayRecord]:
    """Return exactly one record per day of the month, ordered by day.

    Rows dated outside the month are ignored. Matching is by date equality,
    never by string prefix.
    """
    window = MonthWindow(year, month)

    by_date = {}
    for record in records:
        if record.date is not None and window.contains(record.date):
            by_date[record.date] = record

    return [by_date.get(day) or placeholder(day) for day in window.days()]


def initial_weight(records: Iterable[DayRecord]) -> float:
    """Weight of the earliest day that has one, or DEFAULT_INITIAL_WEIGHT."""
    for record in sorted(records, key=lambda r: r.date):
        if record.weight is not None:
            return record.weight
    return DEFAULT_INITIAL_WEIGHT
