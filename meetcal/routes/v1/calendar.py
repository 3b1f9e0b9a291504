# meetcal/routes/v1/calendar.py
"""
Personal calendar routes - API v1

Versioned calendar endpoints under /api/v1/calendar.
All business logic delegated to ScheduleService.

Endpoints:
    GET /week?day=YYYY-MM-DD    → The caller's week containing ``day``
    PUT /week                   → Replace the caller's week
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_current_user, get_schedule_service
from ...core.exceptions import DomainException, handle_domain_exception
from ...core.timezone_utils import get_user_today
from ...models.user import User
from ...schemas.calendar import (
    DaySlots,
    WeekSaveResponse,
    WeekScheduleResponse,
    WeekScheduleSaveRequest,
)
from ...services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["calendar-v1"])


@router.get("/week", response_model=WeekScheduleResponse)
async def get_my_week(
    day: Optional[str] = Query(
        None, description="Any date in the wanted week (YYYY-MM-DD); defaults to today"
    ),
    current_user: User = Depends(get_current_user),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> WeekScheduleResponse:
    """
    Get the caller's availability for one Sunday-aligned week.

    Days with nothing saved come back as 30 unavailable slots.
    """
    try:
        week = await asyncio.to_thread(
            schedule_service.get_week,
            current_user.id,
            day if day is not None else get_user_today(current_user),
        )
    except DomainException as e:
        handle_domain_exception(e)

    return WeekScheduleResponse(
        week_start_date=week.week_start,
        days=[DaySlots(date=d.isoformat(), slots=slots) for d, slots in week.days],
    )


@router.put("/week", response_model=WeekSaveResponse)
async def save_my_week(
    payload: WeekScheduleSaveRequest,
    current_user: User = Depends(get_current_user),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> WeekSaveResponse:
    """
    Replace the caller's availability for the week containing ``reference_date``.

    All 7 days are written together or not at all.
    """
    try:
        window = await asyncio.to_thread(
            schedule_service.save_week,
            current_user.id,
            payload.reference_date,
            [(entry.date, entry.slots) for entry in payload.days],
        )
    except DomainException as e:
        handle_domain_exception(e)

    return WeekSaveResponse(week_start_date=window.start_date)
