# meetcal/services/__init__.py
"""
Service layer for meetcal.

Services hold the business rules and own the transaction boundary;
repositories below them only read and write rows.
"""

from .base import BaseService
from .group_service import ExitResult, GroupDetail, GroupService
from .group_week_service import GroupPage, GroupWeekService, GroupWeekView, MemberWeek
from .schedule_service import ScheduleService, WeekSchedule

__all__ = [
    "BaseService",
    "ExitResult",
    "GroupDetail",
    "GroupPage",
    "GroupService",
    "GroupWeekService",
    "GroupWeekView",
    "MemberWeek",
    "ScheduleService",
    "WeekSchedule",
]
