"""Pydantic schemas for user registration API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RegisterUserRequest(BaseModel):
    """Schema for self-service registration."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    repeat_password: str = Field(..., min_length=1)
    source_system: str | None = Field(None, max_length=50)


class ProfileResponse(BaseModel):
    """Schema for Profile response (activation code is never exposed)."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "jane@example.com",
                "name": "Jane Doe",
                "handle": "@JaneDoe",
                "role": "USER",
                "status": "UNCONFIRMED",
                "badges": ["NEW_MEMBER"],
                "bio": {"avatar_url": "https://static.signup.local/avatars/default.png"},
                "created_at": "2026-02-01T10:00:00Z",
            }
        },
    )

    id: str
    email: str
    name: str
    handle: str
    role: str
    status: str
    badges: list[str] = Field(default_factory=list)
    bio: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class ProfileCreatedResponse(BaseModel):
    """Schema for registration response."""

    data: ProfileResponse
