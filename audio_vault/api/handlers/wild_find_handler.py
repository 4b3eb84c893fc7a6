"""
Wild Find Handler

Saved AI analyses: Wild Finds (photo spotted in the wild) and Ad Analyses
(evaluated sale listings).

Endpoints:
==========
    GET    /wild-finds             Own finds, newest first
    POST   /wild-finds             Save a find
    GET    /wild-finds/{find_id}   Any authenticated user
    DELETE /wild-finds/{find_id}   Owner only; also removes the stored image
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from audio_vault.api.dependencies.auth import CurrentUser
from audio_vault.api.dependencies.services import get_wild_find_service
from audio_vault.shared.schemas.common import MessageResponse
from audio_vault.shared.schemas.wild_find import (
    WildFindCreate,
    WildFindResponse,
    WildFindSavedResponse,
)
from audio_vault.shared.services.wild_find_service import WildFindService


router = APIRouter()


@router.get("", response_model=list[WildFindResponse])
async def list_finds(
    current_user: CurrentUser,
    wild_find_service: WildFindService = Depends(get_wild_find_service),
):
    return await wild_find_service.list_own_finds(current_user.id)


@router.post("", response_model=WildFindSavedResponse, status_code=status.HTTP_201_CREATED)
async def save_find(
    payload: WildFindCreate,
    current_user: CurrentUser,
    wild_find_service: WildFindService = Depends(get_wild_find_service),
):
    """
    Save the result of /items/analyze-wild-find or /items/analyze-ad-listing.

    Raises:
        400: Missing imageUrl, or the analysis block the find type requires
    """
    find = await wild_find_service.save_find(current_user.id, payload)
    return WildFindSavedResponse(find=WildFindResponse.model_validate(find))


@router.get("/{find_id}", response_model=WildFindResponse)
async def get_find(
    find_id: UUID,
    _current_user: CurrentUser,
    wild_find_service: WildFindService = Depends(get_wild_find_service),
):
    return await wild_find_service.get_find(find_id)


@router.delete("/{find_id}", response_model=MessageResponse)
async def delete_find(
    find_id: UUID,
    current_user: CurrentUser,
    wild_find_service: WildFindService = Depends(get_wild_find_service),
):
    """
    Raises:
        403: Not the owner
        404: No such find
    """
    await wild_find_service.delete_find(find_id, current_user.id)
    return MessageResponse(message="Find deleted successfully.")
