"""
Feed Service

Builds a user's social feed from the people they follow.

Algorithm:
==========
    1. following = ids the caller follows
    2. following empty → return []           (no item/find queries issued)
    3. items = public AudioItems owned by following     (unbounded)
       finds = WildFinds owned by following             (unbounded)
    4. map both through the feed entry mappers
    5. sort by createdAt descending
    6. slice [ (page-1)*page_size : page*page_size ]

Both collections are merged, sorted and sliced in memory. That is the current
behaviour and it reads every matching row on each request; ties on
createdAt have no secondary order, so a page boundary between two records
with identical timestamps may reorder across requests.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.shared.core.logging import get_logger
from audio_vault.shared.repositories.audio_item_repository import AudioItemRepository
from audio_vault.shared.repositories.follow_repository import FollowRepository
from audio_vault.shared.repositories.wild_find_repository import WildFindRepository
from audio_vault.shared.schemas.feed import FeedEntry
from audio_vault.shared.services.access import public_items
from audio_vault.shared.services.feed_entries import (
    entry_from_audio_item,
    entry_from_wild_find,
    newest_first,
)

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 20


class FeedService:
    """Service aggregating followed users' items and finds into one feed."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.follow_repo = FollowRepository(session)
        self.item_repo = AudioItemRepository(session)
        self.find_repo = WildFindRepository(session)

    async def get_feed(
        self,
        user_id: UUID,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[FeedEntry]:
        """
        One page of the caller's feed, newest first.

        Args:
            user_id: Caller
            page: 1-indexed page number
            page_size: Maximum entries returned

        Returns:
            At most `page_size` entries
        """
        page = max(page, 1)
        page_size = max(page_size, 1)

        following = await self.follow_repo.following_ids(user_id)
        if not following:
            return []

        items = await self.item_repo.list_by_owners(following, public_items())
        finds = await self.find_repo.list_by_owners(following)

        merged = newest_first(
            [entry_from_audio_item(item) for item in items]
            + [entry_from_wild_find(find) for find in finds]
        )

        skip = (page - 1) * page_size
        logger.debug(
            "Feed assembled",
            user_id=str(user_id),
            following=len(following),
            total=len(merged),
            page=page,
        )
        return merged[skip : skip + page_size]
