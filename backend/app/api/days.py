from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app import repositories
from app.core.reconcile import placeholder
from app.db import get_db
from app.models.day_record import DayRecord
from app.schemas.day import DayRecordRead, DayRecordUpsert


router = APIRouter(prefix="/days", tags=["days"])


def to_read(record: DayRecord) -> DayRecordRead:
    return DayRecordRead(
        date=record.date,
        weight=float(record.weight) if record.weight is not None else None,
        comment=record.comment,
        # placeholders are transient objects that were never flushed
        persisted=inspect(record).has_identity,
    )


@router.get("/{day}", response_model=DayRecordRead)
def get_day(day: date, db: Session = Depends(get_db)):
    row = repositories.get_day(db, day)
    return to_read(row or placeholder(day))


@router.put("/{day}", response_model=DayRecordRead)
def put_day(
    day: date,
    payload: DayRecordUpsert,
    db: Session = Depends(get_db),
):
    row = repositories.persist(db, day, payload.weight, payload.comment)
    return to_read(row)
