"""
Follow Repository

Reads and writes follow edges (user_follows rows).

Edge Operations:
================
    add_edge(A, B)      INSERT (A, B) ON CONFLICT DO NOTHING
    remove_edge(A, B)   DELETE (A, B); no-op when absent
    following_ids(A)    SELECT followee_id WHERE follower_id = A
    follower_ids(B)     SELECT follower_id WHERE followee_id = B

Each mutation is a single statement on one row, so both directions of a
relationship change together inside whatever transaction the caller is
running. Two requests adding the same edge at once both succeed; the
primary key keeps one row and the loser sees rowcount 0.
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from audio_vault.shared.models.follow import Follow
from audio_vault.shared.models.base import utcnow


_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class FollowRepository:
    """Repository for follow edges keyed by (follower_id, followee_id)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def edge_exists(self, follower_id: UUID, followee_id: UUID) -> bool:
        result = await self.session.execute(
            select(Follow.follower_id).where(
                Follow.follower_id == follower_id,
                Follow.followee_id == followee_id,
            )
        )
        return result.first() is not None

    async def add_edge(self, follower_id: UUID, followee_id: UUID) -> bool:
        """
        Insert the edge if missing.

        Returns:
            True when a row was inserted, False when it already existed
        """
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS[dialect]
        statement = (
            insert(Follow.__table__)
            .values(follower_id=follower_id, followee_id=followee_id, created_at=utcnow())
            .on_conflict_do_nothing(index_elements=["follower_id", "followee_id"])
        )
        result = await self.session.execute(statement)
        return result.rowcount == 1

    async def remove_edge(self, follower_id: UUID, followee_id: UUID) -> bool:
        """
        Delete the edge if present.

        Returns:
            True when a row was deleted
        """
        result = await self.session.execute(
            delete(Follow.__table__).where(
                Follow.follower_id == follower_id,
                Follow.followee_id == followee_id,
            )
        )
        return result.rowcount == 1

    async def following_ids(self, user_id: UUID) -> list[UUID]:
        """Ids of the users `user_id` follows."""
        result = await self.session.execute(select(Follow.followee_id).where(Follow.follower_id == user_id))
        return list(result.scalars().all())

    async def follower_ids(self, user_id: UUID) -> list[UUID]:
        """Ids of the users following `user_id`."""
        result = await self.session.execute(select(Follow.follower_id).where(Follow.followee_id == user_id))
        return list(result.scalars().all())

    async def count_following(self, user_id: UUID) -> int:
        result = await self.session.execute(
            select(sql_count()).select_from(Follow).where(Follow.follower_id == user_id)
        )
        return result.scalar() or 0

    async def count_followers(self, user_id: UUID) -> int:
        result = await self.session.execute(
            select(sql_count()).select_from(Follow).where(Follow.followee_id == user_id)
        )
        return result.scalar() or 0
