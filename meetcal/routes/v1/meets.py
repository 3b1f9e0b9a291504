# meetcal/routes/v1/meets.py
"""
Meet group routes - API v1

Versioned group endpoints under /api/v1/meets.
All business logic delegated to GroupService and GroupWeekService.

Endpoints:
    POST /                                  → Create a group (caller becomes owner)
    GET /                                   → Groups the caller belongs to
    POST /{group_id}/join                   → Join a group
    GET /{group_id}?day=YYYY-MM-DD          → Group detail with members' week
    PATCH /{group_id}                       → Owner edits name/start date
    DELETE /{group_id}                      → Owner deletes the group
    DELETE /{group_id}/members/{user_id}    → Leave the group, or owner kicks a member
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from ...api.dependencies import get_current_user, get_group_service, get_group_week_service
from ...core.exceptions import DomainException, handle_domain_exception
from ...core.ulid_helper import ULID_PATTERN
from ...models.meet import MeetGroup
from ...models.user import User
from ...schemas.calendar import DaySlots
from ...schemas.meets import (
    GroupCreate,
    GroupDetailResponse,
    GroupListItem,
    GroupListResponse,
    GroupResponse,
    GroupUpdate,
    MemberWeekResponse,
    MessageResponse,
)
from ...services.group_service import ExitResult, GroupService
from ...services.group_week_service import GroupWeekService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["meets-v1"])


def _group_response(group: MeetGroup) -> GroupResponse:
    return GroupResponse(
        group_id=group.id,
        group_name=group.name,
        start_date=group.start_date,
        owner_id=group.owner_id,
    )


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_meet(
    payload: GroupCreate,
    current_user: User = Depends(get_current_user),
    group_service: GroupService = Depends(get_group_service),
) -> GroupResponse:
    """Create a group owned by the caller, who also becomes its first member."""
    try:
        group = await asyncio.to_thread(
            group_service.create_group,
            current_user.id,
            payload.group_name,
            payload.start_date,
        )
    except DomainException as e:
        handle_domain_exception(e)

    return _group_response(group)


@router.get("", response_model=GroupListResponse)
async def list_my_meets(
    current_user: User = Depends(get_current_user),
    group_service: GroupService = Depends(get_group_service),
) -> GroupListResponse:
    """List the caller's groups, most recently created first."""
    try:
        rows = await asyncio.to_thread(group_service.list_groups_for, current_user.id)
    except DomainException as e:
        handle_domain_exception(e)

    return GroupListResponse(
        meets=[
            GroupListItem(**_group_response(group).model_dump(), member_count=count)
            for group, count in rows
        ]
    )


@router.post("/{group_id}/join", response_model=MessageResponse)
async def join_meet(
    group_id: int = Path(..., ge=1, description="Group ID"),
    current_user: User = Depends(get_current_user),
    group_service: GroupService = Depends(get_group_service),
) -> MessageResponse:
    """Join a group. Joining twice is a 409."""
    try:
        await asyncio.to_thread(group_service.join, group_id, current_user.id)
    except DomainException as e:
        handle_domain_exception(e)

    return MessageResponse(message="Joined group")


@router.get("/{group_id}", response_model=GroupDetailResponse)
async def get_meet(
    group_id: int = Path(..., ge=1, description="Group ID"),
    day: Optional[str] = Query(
        None, description="Any date in the wanted week (YYYY-MM-DD); defaults to the start date"
    ),
    current_user: User = Depends(get_current_user),
    group_week_service: GroupWeekService = Depends(get_group_week_service),
) -> GroupDetailResponse:
    """
    Group detail.

    Anyone signed in sees the group and its member list. Only members also
    get every member's availability for the requested week.
    """
    try:
        page = await asyncio.to_thread(
            group_week_service.get_group_page, group_id, current_user.id, day
        )
    except DomainException as e:
        handle_domain_exception(e)

    return GroupDetailResponse(
        **_group_response(page.group).model_dump(),
        participates=page.participates,
        week_start_date=page.week_start,
        members=[
            MemberWeekResponse(
                user_id=member.user_id,
                name=member.name,
                days=(
                    None
                    if member.days is None
                    else [DaySlots(date=d.isoformat(), slots=slots) for d, slots in member.days]
                ),
            )
            for member in page.members
        ],
    )


@router.patch("/{group_id}", response_model=GroupResponse)
async def update_meet(
    payload: GroupUpdate,
    group_id: int = Path(..., ge=1, description="Group ID"),
    current_user: User = Depends(get_current_user),
    group_service: GroupService = Depends(get_group_service),
) -> GroupResponse:
    """Owner-only: change the group name and/or start date."""
    try:
        group = await asyncio.to_thread(
            group_service.update,
            group_id,
            current_user.id,
            group_name=payload.group_name,
            start_date=payload.start_date,
        )
    except DomainException as e:
        handle_domain_exception(e)

    return _group_response(group)


@router.delete("/{group_id}", response_model=MessageResponse)
async def delete_meet(
    group_id: int = Path(..., ge=1, description="Group ID"),
    current_user: User = Depends(get_current_user),
    group_service: GroupService = Depends(get_group_service),
) -> MessageResponse:
    """Owner-only: delete the group and all of its memberships."""
    try:
        await asyncio.to_thread(group_service.remove, group_id, current_user.id)
    except DomainException as e:
        handle_domain_exception(e)

    return MessageResponse(message="Group deleted")


@router.delete("/{group_id}/members/{user_id}", response_model=MessageResponse)
async def remove_meet_member(
    group_id: int = Path(..., ge=1, description="Group ID"),
    user_id: str = Path(..., pattern=ULID_PATTERN, description="Member to remove"),
    current_user: User = Depends(get_current_user),
    group_service: GroupService = Depends(get_group_service),
) -> MessageResponse:
    """Leave a group yourself, or (as owner) remove another member."""
    try:
        result = await asyncio.to_thread(
            group_service.exit_or_kick, group_id, current_user.id, user_id
        )
    except DomainException as e:
        handle_domain_exception(e)

    if result is ExitResult.EXIT:
        return MessageResponse(message="Left group")
    return MessageResponse(message="Member removed")
