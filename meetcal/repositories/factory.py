# meetcal/repositories/factory.py
"""
Repository Factory for meetcal

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from sqlalchemy.orm import Session

from .group_repository import GroupRepository
from .membership_repository import MembershipRepository
from .schedule_day_repository import ScheduleDayRepository
from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_schedule_day_repository(db: Session) -> ScheduleDayRepository:
        """Create repository for packed daily availability."""
        return ScheduleDayRepository(db)

    @staticmethod
    def create_group_repository(db: Session) -> GroupRepository:
        """Create repository for meet groups."""
        return GroupRepository(db)

    @staticmethod
    def create_membership_repository(db: Session) -> MembershipRepository:
        """Create repository for group memberships."""
        return MembershipRepository(db)

    @staticmethod
    def create_user_repository(db: Session) -> UserRepository:
        """Create repository for user lookups."""
        return UserRepository(db)
