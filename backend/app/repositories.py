import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.month_utils import MonthWindow
from app.db import StorageError
from app.models.day_record import DayRecord

logger = logging.getLogger(__name__)


def fetch_month(db: Session, window: MonthWindow) -> list[DayRecord]:
    """Stored rows for the month, unordered. Days without a row are absent."""
    try:
        rows = (
            db.query(DayRecord)
            .filter(DayRecord.date >= window.first_day)
            .filter(DayRecord.date <= window.last_day)
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Reading %s failed", window.key)
        raise StorageError(f"Could not read {window.key}") from e
    logger.debug("Fetched %d rows for %s", len(rows), window.key)
    return rows


def get_day(db: Session, day: date) -> Optional[DayRecord]:
    try:
        return db.query(DayRecord).filter(DayRecord.date == day).first()
    except SQLAlchemyError as e:
        logger.exception("Reading %s failed", day)
        raise StorageError(f"Could not read {day.isoformat()}") from e


def persist(
    db: Session,
    day: date,
    weight: Optional[float],
    comment: Optional[str],
) -> DayRecord:
    """Insert or replace the row for `day`.

    Both fields are overwritten, so passing None clears them. On failure the
    transaction is rolled back and the stored row is left as it was.
    """
    try:
        row = db.query(DayRecord).filter(DayRecord.date == day).first()
        if not row:
            row = DayRecord(date=day, weight=weight, comment=comment)
            db.add(row)
        else:
            row.weight = weight
            row.comment = comment
        db.commit()
        db.refresh(row)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Writing %s failed", day)
        raise StorageError(f"Could not save {day.isoformat()}") from e
    logger.info("Saved %s weight=%s", day.isoformat(), weight)
    return row
