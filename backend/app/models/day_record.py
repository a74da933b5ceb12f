from sqlalchemy import Column, Date, DateTime, Numeric, Text
from sqlalchemy.sql import func
from app.db import Base


class DayRecord(Base):
    __tablename__ = "day_records"

    # One row per calendar day
    date = Column(Date, primary_key=True, nullable=False)

    weight = Column(Numeric(6, 2, asdecimal=False), nullable=True)  # e.g. 152.4
    comment = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self):
        return f"<DayRecord {self.date} weight={self.weight}>"
