# meetcal/repositories/__init__.py
"""
Repository layer for meetcal.

Repositories encapsulate data access; services own transactions.
"""

from .base_repository import BaseRepository
from .factory import RepositoryFactory
from .group_repository import GroupRepository
from .membership_repository import MembershipRepository
from .schedule_day_repository import ScheduleDayRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "RepositoryFactory",
    "GroupRepository",
    "MembershipRepository",
    "ScheduleDayRepository",
    "UserRepository",
]
