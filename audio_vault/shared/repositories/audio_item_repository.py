"""
Audio Item Repository

Database operations specific to the AudioItem model.

Query Methods:
==============
- list_by_owner()     → Every item of one user (dashboard, "my items")
- list_by_owners()    → Items of a set of users (feed fan-out), owner eager-loaded
- list_paginated()    → Newest-first page over all users (discover)
- count_where()       → Count for the same filter set

Visibility filters are not hard-coded here. Callers pass SQL criteria built
by `audio_vault.shared.services.access`, which keeps the privacy rule in one
place.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.functions import count as sql_count

from audio_vault.shared.repositories.base import BaseRepository
from audio_vault.shared.models.audio_item import AudioItem


class AudioItemRepository(BaseRepository[AudioItem]):
    """Repository for AudioItem database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(AudioItem, session)

    async def get_with_owner(self, item_id: UUID) -> Optional[AudioItem]:
        """Get an item together with its owning user."""
        result = await self.session.execute(
            select(AudioItem).options(selectinload(AudioItem.user)).where(AudioItem.id == item_id)
        )
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: UUID, *criteria: Any) -> list[AudioItem]:
        """
        All items of one owner, newest first.

        SQL Generated:
            SELECT * FROM audio_items
            WHERE user_id = '...' [AND privacy = 'Public']
            ORDER BY created_at DESC
        """
        result = await self.session.execute(
            select(AudioItem)
            .where(AudioItem.user_id == owner_id, *criteria)
            .order_by(AudioItem.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_by_owners(self, owner_ids: list[UUID], *criteria: Any) -> list[AudioItem]:
        """
        All items owned by any of `owner_ids`, with the owner loaded.

        No LIMIT: the feed orders and slices after merging with wild finds.
        """
        if not owner_ids:
            return []

        result = await self.session.execute(
            select(AudioItem)
            .options(selectinload(AudioItem.user))
            .where(AudioItem.user_id.in_(owner_ids), *criteria)
        )
        return list(result.scalars().all())

    async def list_paginated(self, *criteria: Any, offset: int = 0, limit: int = 20) -> list[AudioItem]:
        """
        Newest-first page of items matching `criteria`, owner loaded.

        SQL Generated:
            SELECT * FROM audio_items WHERE privacy = 'Public'
            ORDER BY created_at DESC OFFSET 20 LIMIT 20
        """
        result = await self.session.execute(
            select(AudioItem)
            .options(selectinload(AudioItem.user))
            .where(*criteria)
            .order_by(AudioItem.created_at.desc(), AudioItem.id)
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_where(self, *criteria: Any) -> int:
        """Count items matching `criteria`."""
        result = await self.session.execute(select(sql_count()).select_from(AudioItem).where(*criteria))
        return result.scalar() or 0
