"""
User Handler

Account, social graph and feed endpoints.

Endpoints:
==========
    GET  /users/me                 Caller with following/followers
    GET  /users/dashboard          Caller's own items and finds as feed cards
    GET  /users/feed               Followed users' public items and finds
    POST /users/{user_id}/follow   Follow (idempotent)
    POST /users/{user_id}/unfollow Unfollow (idempotent)
    GET  /users/profile/{user_id}  Public profile (no auth)
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from audio_vault.api.dependencies.auth import CurrentUser
from audio_vault.api.dependencies.pagination import Pagination
from audio_vault.api.dependencies.services import (
    get_feed_service,
    get_follow_service,
    get_user_service,
)
from audio_vault.shared.schemas.feed import FeedEntry
from audio_vault.shared.schemas.user import FollowResponse, MeResponse, ProfileResponse
from audio_vault.shared.services.feed_service import FeedService
from audio_vault.shared.services.follow_service import FollowService
from audio_vault.shared.services.user_service import UserService


router = APIRouter()


@router.get("/me", response_model=MeResponse)
async def get_me(
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_me(current_user)


@router.get("/dashboard", response_model=list[FeedEntry])
async def get_dashboard(
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    """Private and public items plus saved finds of the caller, newest first."""
    return await user_service.get_dashboard(current_user)


@router.get("/feed", response_model=list[FeedEntry])
async def get_feed(
    current_user: CurrentUser,
    pagination: Pagination,
    feed_service: FeedService = Depends(get_feed_service),
):
    """
    Public items and finds of everyone the caller follows.

    Newest first; `?page=&limit=` select the slice. Following nobody yields [].
    """
    return await feed_service.get_feed(
        current_user.id,
        page=pagination.page,
        page_size=pagination.limit,
    )


@router.post("/{user_id}/follow", response_model=FollowResponse)
async def follow_user(
    user_id: UUID,
    current_user: CurrentUser,
    follow_service: FollowService = Depends(get_follow_service),
):
    """
    Raises:
        400: Following yourself
        404: No such user
    """
    result = await follow_service.follow(current_user.id, user_id)
    return FollowResponse(
        message="Successfully followed user." if result.changed else "You are already following this user.",
        is_following=result.is_following,
        followers_count=result.followers_count,
    )


@router.post("/{user_id}/unfollow", response_model=FollowResponse)
async def unfollow_user(
    user_id: UUID,
    current_user: CurrentUser,
    follow_service: FollowService = Depends(get_follow_service),
):
    """Without an edge (yourself or an unknown id included) this is a no-op."""
    result = await follow_service.unfollow(current_user.id, user_id)
    return FollowResponse(
        message="Successfully unfollowed user." if result.changed else "You are not following this user.",
        is_following=result.is_following,
        followers_count=result.followers_count,
    )


@router.get("/profile/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: UUID,
    user_service: UserService = Depends(get_user_service),
):
    """
    Public profile. Items are listed only when the collection is public, and
    only items marked public.

    Raises:
        404: No such user
    """
    return await user_service.get_profile(user_id)
