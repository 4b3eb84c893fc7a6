"""
Wild Find Repository

Database operations specific to the WildFind model.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from audio_vault.shared.repositories.base import BaseRepository
from audio_vault.shared.models.wild_find import WildFind


class WildFindRepository(BaseRepository[WildFind]):
    """Repository for saved AI analyses."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(WildFind, session)

    async def list_by_owner(self, owner_id: UUID) -> list[WildFind]:
        """
        All finds of one owner, newest first.

        SQL Generated:
            SELECT * FROM wild_finds WHERE user_id = '...' ORDER BY created_at DESC
        """
        result = await self.session.execute(
            select(WildFind).where(WildFind.user_id == owner_id).order_by(WildFind.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_by_owners(self, owner_ids: list[UUID]) -> list[WildFind]:
        """All finds owned by any of `owner_ids`, with the owner loaded."""
        if not owner_ids:
            return []

        result = await self.session.execute(
            select(WildFind).options(selectinload(WildFind.user)).where(WildFind.user_id.in_(owner_ids))
        )
        return list(result.scalars().all())
