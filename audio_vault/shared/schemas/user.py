"""
User Schemas

Request/response models for authentication and user endpoints.

    POST /api/auth/register   UserCreate  → AuthResponse
    POST /api/auth/login      UserLogin   → AuthResponse
    GET  /api/users/me                    → MeResponse
    GET  /api/users/profile/{id}          → ProfileResponse
    POST /api/users/{id}/follow           → FollowResponse
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from audio_vault.shared.schemas.common import BaseSchema
from audio_vault.shared.schemas.item import AudioItemResponse


USERNAME_PATTERN = r"^[A-Za-z0-9_]{3,20}$"


class UserCreate(BaseSchema):
    """Schema for user registration."""

    email: EmailStr
    password: str = Field(
        min_length=8,
        description="Password (minimum 8 characters)",
    )
    username: Optional[str] = Field(
        default=None,
        pattern=USERNAME_PATTERN,
        description="Public handle; derived from the e-mail when omitted",
    )

    @field_validator("username", mode="before")
    @classmethod
    def blank_username_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value


class UserLogin(BaseSchema):
    """Schema for user login."""

    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(BaseSchema):
    """Public view of the authenticated user's account."""

    id: UUID
    username: str
    email: str
    is_collection_public: bool
    created_at: datetime


class AuthResponse(BaseSchema):
    """Schema for authentication response."""

    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse


class MeResponse(UserResponse):
    """Current user with both sides of the follow graph."""

    following: list[UUID] = Field(default_factory=list)
    followers: list[UUID] = Field(default_factory=list)
    following_count: int = 0
    followers_count: int = 0


class ProfileResponse(BaseSchema):
    """
    Public profile page.

    `items` holds public items only, and stays empty while the owner keeps the
    collection private.
    """

    id: UUID
    username: str
    is_collection_public: bool
    followers_count: int
    following_count: int
    items: list[AudioItemResponse] = Field(default_factory=list)


class FollowResponse(BaseSchema):
    """Result of a follow/unfollow call."""

    message: str
    is_following: bool
    followers_count: int
