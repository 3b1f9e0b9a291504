"""Pydantic schemas for the current-user profile."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Profile of the authenticated user."""

    id: str = Field(..., description="User ID (ULID)")
    name: str = Field(..., description="Display name shown to group members")
    email: str = Field(..., description="Email address")
    timezone: str = Field(..., description="IANA timezone used to resolve 'today'")
    profile_img: Optional[str] = Field(None, description="Avatar URL, if the user has one")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "01K2K8CVN3A55280PFKJD9YHKV",
                "name": "Ana",
                "email": "ana@example.com",
                "timezone": "America/New_York",
                "profile_img": "https://cdn.example.com/avatars/ana.png",
            }
        },
    )
