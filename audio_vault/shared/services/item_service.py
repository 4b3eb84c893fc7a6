"""
Item Service

Business logic for catalog items: CRUD, photos and AI evaluation.

Ownership:
==========
Every mutation loads the item first and runs it through
access.ensure_owner(); single-item reads go through
access.ensure_can_view_item(). Lists shown to other users use the
access.public_items() criterion.

Photos:
=======
    create   uploads → photo_urls
    update   photo_urls = existingPhotoUrls (kept subset) + new uploads
             removed photos are deleted from storage after the update
    delete   photos are deleted from storage (failures logged), then the row

Usage:
======
    service = ItemService(db, storage)
    item = await service.create_item(user.id, payload, photos)
"""

from typing import Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.config.settings import settings
from audio_vault.shared.adapters.storage_adapter import ITEM_PHOTO_PREFIX, StorageAdapter, UploadedFile
from audio_vault.shared.core.exceptions import ItemNotFoundError, ValidationError
from audio_vault.shared.core.logging import get_logger
from audio_vault.shared.models.audio_item import AudioItem
from audio_vault.shared.models.base import utcnow
from audio_vault.shared.repositories.audio_item_repository import AudioItemRepository
from audio_vault.shared.schemas.analysis import as_document
from audio_vault.shared.schemas.item import AudioItemCreate, AudioItemUpdate
from audio_vault.shared.services.access import ensure_can_view_item, ensure_owner, public_items
from audio_vault.shared.services.analysis_service import AnalysisService

logger = get_logger(__name__)


class ItemService:
    """
    Service for audio item business logic.

    Attributes:
        session: Database session
        storage: Photo storage adapter
        repo: AudioItemRepository instance
    """

    def __init__(self, session: AsyncSession, storage: StorageAdapter) -> None:
        self.session = session
        self.storage = storage
        self.repo = AudioItemRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_own_items(self, user_id: UUID) -> list[AudioItem]:
        """Every item of the caller, newest first, private ones included."""
        return await self.repo.list_by_owner(user_id)

    async def get_item(self, item_id: UUID, viewer_id: Optional[UUID]) -> AudioItem:
        """
        Raises:
            ItemNotFoundError: No such item
            AuthorizationError: Private item of another user
        """
        item = await self._load(item_id)
        ensure_can_view_item(item, viewer_id)
        return item

    async def discover(self, offset: int, limit: int) -> Tuple[list[AudioItem], int]:
        """Public items of all users, newest first, paginated in SQL."""
        items = await self.repo.list_paginated(public_items(), offset=offset, limit=limit)
        total = await self.repo.count_where(public_items())
        return items, total

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITES
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_item(
        self,
        user_id: UUID,
        payload: AudioItemCreate,
        photos: Sequence[UploadedFile] = (),
    ) -> AudioItem:
        """Store the photos, then the item."""
        self._check_photo_count(len(photos))
        photo_urls = [await self._upload(photo) for photo in photos]

        item = await self.repo.create(
            user_id=user_id,
            photo_urls=photo_urls,
            **payload.model_dump(),
        )

        logger.info("Item created", item_id=str(item.id), user_id=str(user_id), photos=len(photo_urls))
        return item

    async def update_item(
        self,
        item_id: UUID,
        user_id: UUID,
        payload: AudioItemUpdate,
        photos: Sequence[UploadedFile] = (),
    ) -> AudioItem:
        """
        Apply the whitelisted fields the client sent.

        Raises:
            ItemNotFoundError: No such item
            AuthorizationError: Caller is not the owner
        """
        item = await self._load(item_id)
        ensure_owner(item, user_id)

        kept = list(item.photo_urls)
        if payload.existing_photo_urls is not None:
            requested = set(payload.existing_photo_urls)
            kept = [url for url in item.photo_urls if url in requested]

        self._check_photo_count(len(kept) + len(photos))
        removed = [url for url in item.photo_urls if url not in kept]
        new_urls = [await self._upload(photo) for photo in photos]

        for field, value in payload.changes().items():
            setattr(item, field, value)
        item.photo_urls = kept + new_urls

        item = await self.repo.save(item)

        if removed:
            await self.storage.delete_quietly(removed)

        logger.info(
            "Item updated",
            item_id=str(item.id),
            fields=sorted(payload.changes()),
            photos_added=len(new_urls),
            photos_removed=len(removed),
        )
        return item

    async def delete_item(self, item_id: UUID, user_id: UUID) -> None:
        """
        Raises:
            ItemNotFoundError: No such item
            AuthorizationError: Caller is not the owner
        """
        item = await self._load(item_id)
        ensure_owner(item, user_id, action="delete")

        await self.storage.delete_quietly(list(item.photo_urls))
        await self.repo.delete(item.id)

        logger.info("Item deleted", item_id=str(item_id), user_id=str(user_id))

    async def evaluate_item(self, item_id: UUID, user_id: UUID, analysis: AnalysisService) -> AudioItem:
        """
        Run the value insight and gear suggestion prompts and store the results.

        Raises:
            ItemNotFoundError: No such item
            AuthorizationError: Caller is not the owner
            AnalysisUnavailableError: The AI provider failed
        """
        item = await self._load(item_id)
        ensure_owner(item, user_id, action="evaluate")

        insight, suggestions = await analysis.evaluate_item(item)
        item.ai_value_insight = as_document(insight)
        item.ai_suggestions = as_document(suggestions)
        item.ai_last_evaluated = utcnow()

        logger.info("Item evaluated", item_id=str(item.id), suggestions=len(suggestions.suggestions))
        return await self.repo.save(item)

    # ═══════════════════════════════════════════════════════════════════════════
    # INTERNALS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _load(self, item_id: UUID) -> AudioItem:
        item = await self.repo.get(item_id)
        if not item:
            raise ItemNotFoundError(str(item_id))
        return item

    async def _upload(self, photo: UploadedFile) -> str:
        return await self.storage.upload_image(photo, prefix=ITEM_PHOTO_PREFIX, max_bytes=settings.MAX_PHOTO_BYTES)

    @staticmethod
    def _check_photo_count(count: int) -> None:
        if count > settings.MAX_ITEM_PHOTOS:
            raise ValidationError(
                f"Too many photos. An item holds at most {settings.MAX_ITEM_PHOTOS}.",
                details={"maxPhotos": settings.MAX_ITEM_PHOTOS, "received": count},
            )
