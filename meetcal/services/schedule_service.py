# meetcal/services/schedule_service.py
"""
Personal schedule service for meetcal.

Reads and writes a user's weekly availability. Each calendar day is stored
as one packed row (see ``meetcal.utils.bitset``); a week is always the
Sunday-aligned window containing the reference date.
"""

from datetime import date
import logging
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from ..core.exceptions import ValidationException
from ..repositories.factory import RepositoryFactory
from ..repositories.schedule_day_repository import ScheduleDayRepository
from ..utils.bitset import (
    SLOTS_PER_DAY,
    decode_slots,
    empty_slots,
    encode_slots,
    indexes_from_slots,
)
from ..utils.week_window import DAYS_PER_WEEK, DateLike, WeekWindow, parse_calendar_date, window_for
from .base import BaseService

logger = logging.getLogger(__name__)

DaySlots = Tuple[date, List[bool]]


class WeekSchedule(NamedTuple):
    week_start: date
    days: List[DaySlots]


class ScheduleService(BaseService):
    """Service layer for a user's personal weekly availability."""

    def __init__(self, db: Session, repository: Optional[ScheduleDayRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_schedule_day_repository(db)

    @BaseService.measure_operation("get_week")
    def get_week(self, user_id: str, reference_date: DateLike) -> WeekSchedule:
        """
        Return the 7 days of the week containing ``reference_date``.

        Days without a stored record are reported as all-unavailable.
        """
        window = window_for(parse_calendar_date(reference_date, field="reference_date"))
        with self.transaction():
            return self.get_weeks_for_users([user_id], window)[user_id]

    @BaseService.measure_operation("save_week")
    def save_week(
        self,
        user_id: str,
        reference_date: DateLike,
        days: Sequence[Tuple[DateLike, Sequence[bool]]],
    ) -> WeekWindow:
        """
        Replace the stored availability for the week containing ``reference_date``.

        Every entry is validated before anything is written; the 7 rows are
        then upserted in a single transaction, so either all of them land or
        none do.

        Args:
            user_id: Owner of the schedule
            reference_date: Any date inside the target week
            days: Exactly 7 ``(date, slots)`` pairs covering the week

        Returns:
            The week window that was written

        Raises:
            ValidationException: On any malformed input
            PersistenceException: If the batch could not be committed
        """
        window = window_for(parse_calendar_date(reference_date, field="reference_date"))
        items = self._prepare_week(window, days)

        with self.transaction():
            rows_written = self.repository.upsert_week(user_id, items)

        self.log_operation(
            "save_week",
            user_id=user_id,
            week_start=window.start_date.isoformat(),
            rows_written=rows_written,
        )
        return window

    def get_weeks_for_users(
        self, user_ids: Iterable[str], window: WeekWindow
    ) -> Dict[str, WeekSchedule]:
        """
        Batch read of one week for several users.

        Runs in the caller's transaction. Every requested user gets 7 days,
        missing records filled with empty slots.
        """
        ids = list(user_ids)
        stored = self.repository.get_range_for_users(ids, window.start_date, window.end_date)

        result: Dict[str, WeekSchedule] = {}
        for user_id in ids:
            bits_by_day = stored.get(user_id, {})
            days: List[DaySlots] = []
            for day in window.dates:
                bits = bits_by_day.get(day)
                days.append((day, decode_slots(bits) if bits is not None else empty_slots()))
            result[user_id] = WeekSchedule(window.start_date, days)
        return result

    def _prepare_week(
        self, window: WeekWindow, days: Sequence[Tuple[DateLike, Sequence[bool]]]
    ) -> List[Tuple[date, bytes]]:
        if len(days) != DAYS_PER_WEEK:
            raise ValidationException(
                f"Expected {DAYS_PER_WEEK} days, got {len(days)}",
                code="INVALID_WEEK",
                details={"day_count": len(days)},
            )

        items: List[Tuple[date, bytes]] = []
        seen: set[date] = set()
        for raw_date, slots in days:
            day = parse_calendar_date(raw_date, field="days.date")
            if day not in window or day in seen:
                raise ValidationException(
                    "Days must cover exactly the week containing the reference date",
                    code="INVALID_WEEK",
                    details={
                        "date": day.isoformat(),
                        "week_start_date": window.start_date.isoformat(),
                    },
                )
            seen.add(day)

            if len(slots) != SLOTS_PER_DAY or not all(isinstance(v, bool) for v in slots):
                raise ValidationException(
                    f"Each day needs exactly {SLOTS_PER_DAY} boolean slots",
                    code="INVALID_SLOTS",
                    details={"date": day.isoformat(), "slot_count": len(slots)},
                )

            logger.debug(
                "schedule_write day=%s available=%s", day.isoformat(), indexes_from_slots(slots)
            )
            items.append((day, encode_slots(slots)))

        return items
