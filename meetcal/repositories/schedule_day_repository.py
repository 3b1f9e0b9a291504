from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Tuple

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..database.session_utils import get_dialect_name
from ..models import ScheduleDay

_NATIVE_UPSERT = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class ScheduleDayRepository:
    """
    Data access for packed per-day availability rows.

    Reads select plain (date, bits) columns rather than ORM entities so a
    native upsert issued earlier in the same session is always observed.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_range_for_users(
        self, user_ids: Iterable[str], start_date: date, end_date: date
    ) -> Dict[str, Dict[date, bytes]]:
        """Return user_id -> day -> bits for several users in one query."""
        ids = list(user_ids)
        if not ids:
            return {}
        try:
            rows = self.db.execute(
                select(ScheduleDay.user_id, ScheduleDay.day_date, ScheduleDay.bits).where(
                    ScheduleDay.user_id.in_(ids),
                    ScheduleDay.day_date >= start_date,
                    ScheduleDay.day_date <= end_date,
                )
            ).all()
        except SQLAlchemyError as e:
            raise RepositoryException(f"Failed to read schedule range: {e}") from e

        res: Dict[str, Dict[date, bytes]] = {}
        for user_id, day_date, bits in rows:
            res.setdefault(user_id, {})[day_date] = bytes(bits)
        return res

    def upsert_week(self, user_id: str, items: List[Tuple[date, bytes]]) -> int:
        """
        Upsert (date, bits) for a single user; returns row count written.

        Uses INSERT ... ON CONFLICT on PostgreSQL and SQLite so the whole
        batch is one statement; other dialects fall back to query-then-write.
        Does NOT commit.
        """
        if not items:
            return 0

        dialect = get_dialect_name(self.db)
        try:
            insert_fn = _NATIVE_UPSERT.get(dialect)
            if insert_fn is not None:
                now = datetime.now(timezone.utc)
                stmt = insert_fn(ScheduleDay).values(
                    [
                        {"user_id": user_id, "day_date": day_date, "bits": bits, "updated_at": now}
                        for day_date, bits in items
                    ]
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[ScheduleDay.user_id, ScheduleDay.day_date],
                    set_={"bits": stmt.excluded.bits, "updated_at": stmt.excluded.updated_at},
                )
                self.db.execute(stmt)
            else:
                self._upsert_week_orm(user_id, items)
            self.db.flush()
        except SQLAlchemyError as e:
            raise RepositoryException(f"Failed to upsert schedule week: {e}") from e
        return len(items)

    def _upsert_week_orm(self, user_id: str, items: List[Tuple[date, bytes]]) -> None:
        for day_date, bits in items:
            row = (
                self.db.query(ScheduleDay)
                .filter(
                    ScheduleDay.user_id == user_id,
                    ScheduleDay.day_date == day_date,
                )
                .populate_existing()
                .one_or_none()
            )
            if row:
                row.bits = bits
            else:
                self.db.add(ScheduleDay(user_id=user_id, day_date=day_date, bits=bits))
