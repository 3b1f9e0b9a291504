# meetcal/routes/v1/__init__.py
"""Versioned API routers, mounted under /api/v1 by ``meetcal.main``."""

from . import calendar, meets, users

__all__ = ["calendar", "meets", "users"]
