# meetcal/routes/v1/users.py
"""
User routes - API v1

Endpoints:
    GET /me    → Profile of the authenticated user
"""

import logging

from fastapi import APIRouter, Depends

from ...api.dependencies import get_current_user
from ...models.user import User
from ...schemas.user import UserResponse

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["users-v1"])


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user's profile."""
    return UserResponse.model_validate(current_user)
