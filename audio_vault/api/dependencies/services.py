"""
Service Dependencies

FastAPI dependencies for service injection.

These dependencies create service instances with proper database session injection.
Services are created per-request, which is fine because:
- Services only hold the db session and adapter references
- Each request gets its own db session
- Adapters are shared, built once per application

Usage:
======
    from audio_vault.api.dependencies.services import get_item_service

    @router.get("/{item_id}")
    async def get_item(
        item_id: UUID,
        current_user: CurrentUser,
        item_service: ItemService = Depends(get_item_service),
    ):
        return await item_service.get_item(item_id, current_user.id)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.api.dependencies.adapters import get_openai, get_storage
from audio_vault.api.dependencies.database import get_db
from audio_vault.shared.adapters.openai_adapter import OpenAIAdapter
from audio_vault.shared.adapters.storage_adapter import StorageAdapter
from audio_vault.shared.services.analysis_service import AnalysisService
from audio_vault.shared.services.auth_service import AuthService
from audio_vault.shared.services.feed_service import FeedService
from audio_vault.shared.services.follow_service import FollowService
from audio_vault.shared.services.item_service import ItemService
from audio_vault.shared.services.user_service import UserService
from audio_vault.shared.services.wild_find_service import WildFindService


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db)


async def get_user_service(
    db: AsyncSession = Depends(get_db),
) -> UserService:
    return UserService(db)


async def get_follow_service(
    db: AsyncSession = Depends(get_db),
) -> FollowService:
    return FollowService(db)


async def get_feed_service(
    db: AsyncSession = Depends(get_db),
) -> FeedService:
    return FeedService(db)


async def get_item_service(
    db: AsyncSession = Depends(get_db),
    storage: StorageAdapter = Depends(get_storage),
) -> ItemService:
    """
    Dependency to get ItemService instance.
    """
    return ItemService(db, storage)


async def get_wild_find_service(
    db: AsyncSession = Depends(get_db),
    storage: StorageAdapter = Depends(get_storage),
) -> WildFindService:
    return WildFindService(db, storage)


async def get_analysis_service(
    adapter: OpenAIAdapter = Depends(get_openai),
) -> AnalysisService:
    """
    Dependency to get AnalysisService instance.

    Stateless apart from the shared OpenAI adapter; no db session.
    """
    return AnalysisService(adapter)
