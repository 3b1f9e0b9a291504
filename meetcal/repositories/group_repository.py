"""
Group Repository for meetcal

Handles database operations for meet groups, including the membership-count
listing used by the "my groups" view.
"""

import logging
from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.meet import GroupMember, MeetGroup
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class GroupRepository(BaseRepository[MeetGroup]):
    """Repository for meet groups."""

    def __init__(self, db: Session):
        """Initialize with MeetGroup model."""
        super().__init__(db, MeetGroup)

    def list_for_member(self, user_id: str) -> List[Tuple[MeetGroup, int]]:
        """
        Return every group ``user_id`` belongs to with its total member count.

        Ordered by group id descending (most recently created first).
        """
        member_counts = (
            select(GroupMember.group_id, func.count().label("member_count"))
            .group_by(GroupMember.group_id)
            .subquery()
        )
        stmt = (
            select(MeetGroup, member_counts.c.member_count)
            .join(GroupMember, GroupMember.group_id == MeetGroup.id)
            .join(member_counts, member_counts.c.group_id == MeetGroup.id)
            .where(GroupMember.user_id == user_id)
            .order_by(MeetGroup.id.desc())
        )
        try:
            return [(group, int(count)) for group, count in self.db.execute(stmt).all()]
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing groups for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list groups: {str(e)}")
