"""
Pydantic schemas for meet groups.

Defines request and response models for the /meets endpoints.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ._strict_base import StrictRequestModel
from .calendar import DaySlots


class GroupCreate(StrictRequestModel):
    """Create a group; the caller becomes its owner and first member."""

    group_name: str = Field(..., description="Group display name")
    start_date: Optional[str] = Field(
        None, description="Anchor date (YYYY-MM-DD); defaults to today in your timezone"
    )

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        json_schema_extra={"example": {"group_name": "Board games", "start_date": "2025-06-10"}},
    )


class GroupUpdate(StrictRequestModel):
    """Owner-only edit; omitted fields are left unchanged."""

    group_name: Optional[str] = Field(None, description="New display name")
    start_date: Optional[str] = Field(None, description="New anchor date (YYYY-MM-DD)")


class GroupResponse(BaseModel):
    """A meet group."""

    group_id: int = Field(..., description="Group ID")
    group_name: str = Field(..., description="Group display name")
    start_date: date = Field(..., description="Anchor date of the group")
    owner_id: str = Field(..., description="User ID of the owner")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "group_id": 7,
                "group_name": "Board games",
                "start_date": "2025-06-10",
                "owner_id": "01K2K8CVN3A55280PFKJD9YHKV",
            }
        }
    )


class GroupListItem(GroupResponse):
    """A group in the caller's list, with its size."""

    member_count: int = Field(..., description="Number of members including the owner")


class GroupListResponse(BaseModel):
    """Groups the caller belongs to, newest first."""

    meets: List[GroupListItem] = Field(..., description="Groups, most recently created first")


class MemberWeekResponse(BaseModel):
    """One member and, for members of the group, their week."""

    user_id: str = Field(..., description="Member user ID")
    name: str = Field(..., description="Member display name")
    days: Optional[List[DaySlots]] = Field(
        None, description="Member availability; only shown to group members"
    )


class GroupDetailResponse(GroupResponse):
    """Group detail with the members' weekly availability."""

    participates: bool = Field(..., description="Whether the caller is a member")
    week_start_date: Optional[date] = Field(
        None, description="Sunday of the shown week; only set for members"
    )
    members: List[MemberWeekResponse] = Field(..., description="Members by ascending user ID")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(..., description="Human-readable result")
