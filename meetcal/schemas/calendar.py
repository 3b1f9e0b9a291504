"""
Pydantic schemas for the personal weekly calendar.

A day is a list of 30 half-hour slot flags. Dates travel as ISO
``YYYY-MM-DD`` strings and are checked by the service layer, which reports
bad dates and malformed weeks as 400s.
"""

from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from ._strict_base import StrictModel, StrictRequestModel

_EXAMPLE_SLOTS = [False] * 18 + [True] * 4 + [False] * 8


class DaySlots(StrictModel):
    """One calendar day of availability."""

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    slots: List[StrictBool] = Field(..., description="30 half-hour availability flags")


class WeekScheduleResponse(BaseModel):
    """The 7 days of a Sunday-aligned week."""

    week_start_date: date = Field(..., description="Sunday the week starts on")
    days: List[DaySlots] = Field(..., description="Sunday through Saturday, in order")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "week_start_date": "2025-06-08",
                "days": [{"date": "2025-06-08", "slots": _EXAMPLE_SLOTS}],
            }
        }
    )


class WeekScheduleSaveRequest(StrictRequestModel):
    """Replace a whole week of availability."""

    reference_date: str = Field(..., description="Any date inside the target week (YYYY-MM-DD)")
    days: List[DaySlots] = Field(..., description="Exactly 7 days covering the target week")

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "reference_date": "2025-06-11",
                "days": [{"date": "2025-06-08", "slots": _EXAMPLE_SLOTS}],
            }
        },
    )


class WeekSaveResponse(BaseModel):
    """Result of a successful week save."""

    week_start_date: date = Field(..., description="Sunday of the week that was written")
