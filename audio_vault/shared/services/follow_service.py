"""
Follow Service

Maintains the follow graph between users.

Consistency:
============
A follow relationship is a single user_follows row, read as "following" from
the follower's side and as "followers" from the followee's side. Both views
change in the same INSERT/DELETE, inside the request transaction that
get_db() commits or rolls back, so no reader can observe one side without
the other.

    follow(A, B)
        A == B              → InvalidOperationError, nothing written
        A or B missing      → UserNotFoundError, nothing written
        edge (A, B) exists  → no-op
        otherwise           → INSERT (A, B)

    unfollow(A, B)          → DELETE (A, B); no-op when absent,
                              including A == B and unknown B
"""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.shared.core.exceptions import InvalidOperationError, UserNotFoundError
from audio_vault.shared.core.logging import get_logger
from audio_vault.shared.repositories.follow_repository import FollowRepository
from audio_vault.shared.repositories.user_repository import UserRepository

logger = get_logger(__name__)


@dataclass
class FollowResult:
    """State of the edge after a follow/unfollow call."""

    is_following: bool
    changed: bool
    followers_count: int


class FollowService:
    """Service for follow/unfollow mutations and follow-graph reads."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.user_repo = UserRepository(session)
        self.follow_repo = FollowRepository(session)

    async def follow(self, current_user_id: UUID, target_user_id: UUID) -> FollowResult:
        """
        Make `current_user_id` follow `target_user_id`.

        Idempotent: following twice leaves one edge.

        Raises:
            InvalidOperationError: Following yourself
            UserNotFoundError: Either user does not exist
        """
        if current_user_id == target_user_id:
            raise InvalidOperationError("You cannot follow yourself.")

        await self._ensure_users_exist(current_user_id, target_user_id)

        changed = await self.follow_repo.add_edge(current_user_id, target_user_id)
        if changed:
            logger.info("User followed", follower_id=str(current_user_id), followee_id=str(target_user_id))

        return FollowResult(
            is_following=True,
            changed=changed,
            followers_count=await self.follow_repo.count_followers(target_user_id),
        )

    async def unfollow(self, current_user_id: UUID, target_user_id: UUID) -> FollowResult:
        """
        Remove the edge `current_user_id` → `target_user_id`.

        Idempotent: without an edge (self and unknown ids included) nothing
        changes and the result reports changed=False.
        """
        changed = await self.follow_repo.remove_edge(current_user_id, target_user_id)
        if changed:
            logger.info("User unfollowed", follower_id=str(current_user_id), followee_id=str(target_user_id))

        return FollowResult(
            is_following=False,
            changed=changed,
            followers_count=await self.follow_repo.count_followers(target_user_id),
        )

    async def following_ids(self, user_id: UUID) -> list[UUID]:
        return await self.follow_repo.following_ids(user_id)

    async def follower_ids(self, user_id: UUID) -> list[UUID]:
        return await self.follow_repo.follower_ids(user_id)

    async def is_following(self, follower_id: UUID, followee_id: UUID) -> bool:
        return await self.follow_repo.edge_exists(follower_id, followee_id)

    async def _ensure_users_exist(self, *user_ids: UUID) -> None:
        found = {user.id for user in await self.user_repo.get_by_ids(list(user_ids))}
        for user_id in user_ids:
            if user_id not in found:
                raise UserNotFoundError(str(user_id))
