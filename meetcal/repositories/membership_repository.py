"""
Membership Repository for meetcal

Handles the (group_id, user_id) junction rows. Uniqueness of a membership is
enforced by the table's primary key. The insert skips a conflicting row
instead of failing, so a duplicate is reported as DuplicateKeyException from
the row count alone while other integrity failures stay RepositoryException.
"""

import logging
from typing import List

from sqlalchemy import delete, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateKeyException, RepositoryException
from ..database.session_utils import get_dialect_name
from ..models.meet import GroupMember
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

_NATIVE_INSERT = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class MembershipRepository(BaseRepository[GroupMember]):
    """Repository for group memberships."""

    def __init__(self, db: Session):
        """Initialize with GroupMember model."""
        super().__init__(db, GroupMember)

    def add_member(self, group_id: int, user_id: str) -> None:
        """
        Insert a membership row. Does NOT commit.

        On PostgreSQL and SQLite the row is written with ON CONFLICT DO
        NOTHING on the primary key, so concurrent joins are settled by the
        store and the loser sees zero rows written. Other dialects check for
        the row first.

        Raises:
            DuplicateKeyException: If the user already belongs to the group
            RepositoryException: If the insert fails for any other reason,
                including a group or user that does not exist
        """
        insert_fn = _NATIVE_INSERT.get(get_dialect_name(self.db))
        try:
            if insert_fn is not None:
                stmt = (
                    insert_fn(GroupMember)
                    .values(group_id=group_id, user_id=user_id)
                    .on_conflict_do_nothing(
                        index_elements=[GroupMember.group_id, GroupMember.user_id]
                    )
                )
                inserted = int(self.db.execute(stmt).rowcount or 0)
            elif self.is_member(group_id, user_id):
                inserted = 0
            else:
                self.db.execute(insert(GroupMember).values(group_id=group_id, user_id=user_id))
                inserted = 1
        except SQLAlchemyError as e:
            self.logger.error(f"Error adding user {user_id} to group {group_id}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to add member: {str(e)}") from e

        if inserted == 0:
            self.logger.info(f"User {user_id} is already a member of group {group_id}")
            raise DuplicateKeyException(f"Membership already exists: ({group_id}, {user_id})")
        self.logger.info(f"User {user_id} joined group {group_id}")

    def is_member(self, group_id: int, user_id: str) -> bool:
        return self.exists(group_id=group_id, user_id=user_id)

    def list_member_ids(self, group_id: int) -> List[str]:
        """Member user ids in ascending order."""
        try:
            return list(
                self.db.execute(
                    select(GroupMember.user_id)
                    .where(GroupMember.group_id == group_id)
                    .order_by(GroupMember.user_id.asc())
                ).scalars()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing members of group {group_id}: {str(e)}")
            raise RepositoryException(f"Failed to list members: {str(e)}")

    def remove_member(self, group_id: int, user_id: str) -> bool:
        """Delete exactly one membership row. Returns False if it did not exist."""
        return self.delete((group_id, user_id))

    def remove_all_for_group(self, group_id: int) -> int:
        """Delete every membership of a group. Does NOT commit."""
        try:
            result = self.db.execute(
                delete(GroupMember).where(GroupMember.group_id == group_id)
            )
            self.db.flush()
            return int(result.rowcount or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error removing members of group {group_id}: {str(e)}")
            raise RepositoryException(f"Failed to remove members: {str(e)}")
