# meetcal/api/dependencies/auth.py
"""
Authentication dependencies.

User lookups run through ``asyncio.to_thread`` so the blocking query never
runs on the event loop.
"""

import asyncio
import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user_id
from ...core.exceptions import UnauthorizedException
from ...models.user import User
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


async def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to a User.

    Raises:
        UnauthorizedException: If the token names a user that does not exist
    """
    user_repository = RepositoryFactory.create_user_repository(db)
    user = await asyncio.to_thread(user_repository.get_by_id, user_id)
    if user is None:
        logger.info(f"Token subject {user_id} does not match any user")
        raise UnauthorizedException()
    return user
