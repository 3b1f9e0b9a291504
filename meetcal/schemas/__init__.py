# meetcal/schemas/__init__.py
"""
Pydantic schemas for the meetcal API.
"""

# Personal calendar schemas
from .calendar import DaySlots, WeekSaveResponse, WeekScheduleResponse, WeekScheduleSaveRequest

# Meet group schemas
from .meets import (
    GroupCreate,
    GroupDetailResponse,
    GroupListItem,
    GroupListResponse,
    GroupResponse,
    GroupUpdate,
    MemberWeekResponse,
    MessageResponse,
)
from .user import UserResponse

__all__ = [
    "DaySlots",
    "WeekScheduleResponse",
    "WeekScheduleSaveRequest",
    "WeekSaveResponse",
    "GroupCreate",
    "GroupUpdate",
    "GroupResponse",
    "GroupListItem",
    "GroupListResponse",
    "MemberWeekResponse",
    "GroupDetailResponse",
    "MessageResponse",
    "UserResponse",
]
