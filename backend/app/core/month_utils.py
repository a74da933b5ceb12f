import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, order=True)
class MonthWindow:
    """A calendar month selected for display.

    Navigation moves exactly one month at a time and wraps across years:
    MonthWindow(2025, 12).next() == MonthWindow(2026, 1)
    """

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"year must be in 1..9999, got {self.year}")

    @classmethod
    def from_date(cls, d: date) -> "MonthWindow":
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, key: str) -> "MonthWindow":
        """
        Parse a zero-padded 'YYYY-MM' key.
        Example: '2026-02' -> MonthWindow(2026, 2)
        """
        match = _MONTH_KEY_RE.match((key or "").strip())
        if not match:
            raise ValueError("Month must be in YYYY-MM format")
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def label(self) -> str:
        """'February 2026'"""
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, self.days_in_month)

    def days(self) -> list[date]:
        start = self.first_day
        return [start + timedelta(days=i) for i in range(self.days_in_month)]

    def contains(self, d: date) -> bool:
        return d.year == self.year and d.month == self.month

    def next(self) -> "MonthWindow":
        if self.month == 12:
            return MonthWindow(self.year + 1, 1)
        return MonthWindow(self.year, self.month + 1)

    def prev(self) -> "MonthWindow":
        if self.month == 1:
            return MonthWindow(self.year - 1, 12)
        return MonthWindow(self.year, self.month - 1)


def day_label(d: date) -> str:
    """
    Day of the month as an ordinal.
    Example: 1 -> '1st', 12 -> '12th', 22 -> '22nd'
    """
    day = d.day
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def to_local_datetime(dt: datetime, tz_name: str | None = None) -> datetime:
    """Convert a datetime (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is an IANA tz name (e.g., 'America/New_York'): use that.
    - Unknown tz names fall back to the system timezone.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        try:
            return dt.astimezone(ZoneInfo(tz_name))
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r, using system timezone", tz_name)
    return dt.astimezone()


def current_month(tz_name: str | None = None, now: datetime | None = None) -> MonthWindow:
    if now is None:
        now = datetime.now(timezone.utc)
    return MonthWindow.from_date(to_local_datetime(now, tz_name).date())
