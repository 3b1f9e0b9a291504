"""User Repository for meetcal."""

import logging
from typing import Dict, Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user lookups."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_names(self, user_ids: Iterable[str]) -> Dict[str, str]:
        """Return user_id -> display name for the ids that exist."""
        ids = list(user_ids)
        if not ids:
            return {}
        try:
            rows = self.db.execute(select(User.id, User.name).where(User.id.in_(ids))).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading user names: {str(e)}")
            raise RepositoryException(f"Failed to load user names: {str(e)}")
        return {user_id: name for user_id, name in rows}
