"""
User Service

Read-side views of a user: the caller's own account, their dashboard and
other users' public profiles.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.shared.core.exceptions import UserNotFoundError
from audio_vault.shared.models.user import User
from audio_vault.shared.repositories.audio_item_repository import AudioItemRepository
from audio_vault.shared.repositories.follow_repository import FollowRepository
from audio_vault.shared.repositories.user_repository import UserRepository
from audio_vault.shared.repositories.wild_find_repository import WildFindRepository
from audio_vault.shared.schemas.feed import FeedEntry
from audio_vault.shared.schemas.item import AudioItemResponse
from audio_vault.shared.schemas.user import MeResponse, ProfileResponse
from audio_vault.shared.services.access import public_items
from audio_vault.shared.services.feed_entries import (
    MY_COLLECTION_TAG,
    entry_from_audio_item,
    entry_from_wild_find,
    newest_first,
)


class UserService:
    """Service for account, dashboard and profile views."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.user_repo = UserRepository(session)
        self.follow_repo = FollowRepository(session)
        self.item_repo = AudioItemRepository(session)
        self.find_repo = WildFindRepository(session)

    async def get_me(self, user: User) -> MeResponse:
        """The caller's account with both follow lists."""
        following = await self.follow_repo.following_ids(user.id)
        followers = await self.follow_repo.follower_ids(user.id)

        return MeResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            is_collection_public=user.is_collection_public,
            created_at=user.created_at,
            following=following,
            followers=followers,
            following_count=len(following),
            followers_count=len(followers),
        )

    async def get_dashboard(self, user: User) -> list[FeedEntry]:
        """
        Everything the caller owns as feed cards, newest first.

        Items of every privacy level are included; this view is owner-only.
        """
        items = await self.item_repo.list_by_owner(user.id)
        finds = await self.find_repo.list_by_owner(user.id)

        return newest_first(
            [entry_from_audio_item(item, owner=user, tag=MY_COLLECTION_TAG) for item in items]
            + [entry_from_wild_find(find, owner=user) for find in finds]
        )

    async def get_profile(self, user_id: UUID) -> ProfileResponse:
        """
        Public profile of any user.

        Raises:
            UserNotFoundError: No such user
        """
        user = await self.user_repo.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))

        items = []
        if user.is_collection_public:
            items = await self.item_repo.list_by_owner(user.id, public_items())

        return ProfileResponse(
            id=user.id,
            username=user.username,
            is_collection_public=user.is_collection_public,
            followers_count=await self.follow_repo.count_followers(user.id),
            following_count=await self.follow_repo.count_following(user.id),
            items=[AudioItemResponse.model_validate(item) for item in items],
        )
