# meetcal/models/__init__.py
"""
SQLAlchemy models for meetcal.

Importing this package registers every table on ``Base.metadata``.
"""

from .meet import GroupMember, MeetGroup
from .schedule_day import ScheduleDay
from .user import User

__all__ = [
    "User",
    "ScheduleDay",
    "MeetGroup",
    "GroupMember",
]
