"""
Timezone utilities for meetcal.

Provides user-based "today" resolution. Availability is stored per calendar
date, so this is the only place a clock is consulted.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

import pytz

from .config import settings

if TYPE_CHECKING:
    from ..models.user import User


def get_user_timezone(user: Optional["User"]) -> pytz.BaseTzInfo:
    """
    Get user's timezone preference.

    Args:
        user: User object, or None for the configured default

    Returns:
        User's timezone as pytz timezone object
    """
    tz_name = getattr(user, "timezone", None) or settings.default_timezone
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        return pytz.timezone(settings.default_timezone)


def get_user_today(user: Optional["User"]) -> date:
    """Get 'today' in the user's timezone."""
    return datetime.now(get_user_timezone(user)).date()
