# meetcal/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Each request gets fresh service instances bound to its own session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.group_service import GroupService
from ...services.group_week_service import GroupWeekService
from ...services.schedule_service import ScheduleService
from .database import get_db


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Get schedule service instance for dependency injection."""
    return ScheduleService(db)


def get_group_service(db: Session = Depends(get_db)) -> GroupService:
    """Get group service instance for dependency injection."""
    return GroupService(db)


def get_group_week_service(db: Session = Depends(get_db)) -> GroupWeekService:
    """Get group week aggregation service instance for dependency injection."""
    return GroupWeekService(db)
