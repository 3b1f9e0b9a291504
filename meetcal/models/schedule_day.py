from __future__ import annotations

from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy import Column, Date, DateTime, ForeignKey, LargeBinary, String
from sqlalchemy.dialects.postgresql import BYTEA

from ..database import Base


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class ScheduleDay(Base):
    __tablename__ = "schedule_days"

    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    day_date = Column(Date, primary_key=True)
    # 4 bytes, 30 half-hour slots MSB-first. On PG we store BYTEA; on SQLite use LargeBinary
    bits = Column(BYTEA().with_variant(LargeBinary(), "sqlite"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_now_utc,
        onupdate=_now_utc,
        server_default=sa.func.now(),
    )

    def __repr__(self) -> str:
        return f"<ScheduleDay user={self.user_id} date={self.day_date}>"
