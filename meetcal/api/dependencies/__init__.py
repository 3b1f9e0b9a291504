# meetcal/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from .auth import get_current_user
from .database import get_db
from .services import get_group_service, get_group_week_service, get_schedule_service

__all__ = [
    # Auth
    "get_current_user",
    # Database
    "get_db",
    # Services
    "get_schedule_service",
    "get_group_service",
    "get_group_week_service",
]
