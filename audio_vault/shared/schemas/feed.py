"""
Feed Schemas

A Feed Entry is a read-time projection of either an AudioItem or a WildFind
into one display shape. Nothing here is persisted.

    {
        "id": "7c9e6679-...",
        "title": "Pioneer SX-780",
        "imageUrl": "https://...",
        "tag": "For Sale",
        "detailPath": "/item/7c9e6679-...",
        "createdAt": "2024-05-01T12:00:00Z",
        "user": {"id": "550e8400-...", "username": "hifi_hunter"}
    }
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from audio_vault.shared.schemas.common import BaseSchema


class FeedUser(BaseSchema):
    """Owner summary shown on a feed card."""

    id: UUID
    username: str


class FeedEntry(BaseSchema):
    """Normalized feed card."""

    id: UUID
    title: str
    image_url: str
    tag: str
    detail_path: str
    created_at: datetime
    user: Optional[FeedUser] = None
