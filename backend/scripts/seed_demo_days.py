from datetime import date
import random

from app.core.config import settings
from app.core.month_utils import MonthWindow
from app.db import Store
from app.models.day_record import DayRecord
from app.repositories import persist


def clear_month(db, window: MonthWindow) -> None:
    """Delete stored days of one month so we can reseed cleanly."""
    db.query(DayRecord).filter(DayRecord.date >= window.first_day).filter(
        DayRecord.date <= window.last_day
    ).delete()
    db.commit()


def seed_demo_days(db, window: MonthWindow, start_weight: float = 180.0, seed=None) -> int:
    """Fill a month with a slow downward weight drift, skipping some days."""
    rng = random.Random(seed)
    today = date.today()
    weight = start_weight
    count = 0

    for day in window.days():
        # Skip future days
        if day > today:
            break
        weight = round(weight + rng.uniform(-0.6, 0.4), 1)
        # Leave roughly one day in five empty
        if rng.random() < 0.2:
            continue
        comment = "Weekend" if day.weekday() >= 5 else None
        persist(db, day, weight, comment)
        count += 1

    return count


def main():
    window = MonthWindow.from_date(date.today())
    with Store(settings.database_url) as store:
        store.ensure_schema()
        db = store.session()
        try:
            clear_month(db, window)
            count = seed_demo_days(db, window)
        finally:
            db.close()
    print(f"Seeded {count} demo days for {window.label}")


if __name__ == "__main__":
    main()
