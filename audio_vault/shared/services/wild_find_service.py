"""
Wild Find Service

Saving, listing and removing AI analyses (Wild Finds and Ad Analyses), plus
the one-shot pipelines that produce them.

Image Ownership:
================
The analysis pipelines store the photo under the caller's own prefix
(wild-finds/<user id>/...). A find may only be saved with an image from that
prefix, and deleting a find removes its image only when it lives there, so
one user can never point a find at, and then delete, someone else's photo.

If an analysis fails after the photo was stored, the photo is removed again
before the error propagates.
"""

from typing import Awaitable, Callable, Optional, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.config.settings import settings
from audio_vault.shared.adapters.storage_adapter import StorageAdapter, UploadedFile, analysis_prefix
from audio_vault.shared.core.exceptions import NothingIdentifiedError, ValidationError, WildFindNotFoundError
from audio_vault.shared.core.logging import get_logger
from audio_vault.shared.models.enums import FindType
from audio_vault.shared.models.wild_find import WildFind
from audio_vault.shared.repositories.wild_find_repository import WildFindRepository
from audio_vault.shared.schemas.analysis import (
    AnalyzeAdListingResponse,
    AnalyzeWildFindResponse,
    as_document,
)
from audio_vault.shared.schemas.wild_find import WildFindCreate
from audio_vault.shared.services.access import ensure_owner
from audio_vault.shared.services.analysis_service import AnalysisService

logger = get_logger(__name__)

ResultT = TypeVar("ResultT")


class WildFindService:
    """Service for saved AI analyses."""

    def __init__(self, session: AsyncSession, storage: StorageAdapter) -> None:
        self.session = session
        self.storage = storage
        self.repo = WildFindRepository(session)

    async def list_own_finds(self, user_id: UUID) -> list[WildFind]:
        return await self.repo.list_by_owner(user_id)

    async def get_find(self, find_id: UUID) -> WildFind:
        """Any authenticated user may open a saved find."""
        find = await self.repo.get(find_id)
        if not find:
            raise WildFindNotFoundError(str(find_id))
        return find

    async def save_find(self, user_id: UUID, payload: WildFindCreate) -> WildFind:
        """
        Persist a Wild Find or an Ad Analysis produced earlier.

        Raises:
            ValidationError: imageUrl is not an analysis image of the caller
        """
        if not self.storage.is_under(payload.image_url, analysis_prefix(user_id)):
            logger.warning("Rejected find with foreign image", user_id=str(user_id), image_url=payload.image_url)
            raise ValidationError(
                "imageUrl must be an image returned by one of your own analyses.",
                details={"field": "imageUrl"},
            )

        values = {
            "user_id": user_id,
            "find_type": payload.find_type,
            "image_url": payload.image_url,
        }
        if payload.find_type == FindType.AD_ANALYSIS:
            values.update(
                ad_analysis=payload.ad_analysis,
                source_url=payload.source_url,
                asking_price=payload.asking_price,
            )
        else:
            values["analysis"] = as_document(payload.analysis)

        find = await self.repo.create(**values)
        logger.info("Find saved", find_id=str(find.id), user_id=str(user_id), find_type=find.find_type.value)
        return find

    async def delete_find(self, find_id: UUID, user_id: UUID) -> None:
        """
        Raises:
            WildFindNotFoundError: No such find
            AuthorizationError: Caller is not the owner
        """
        find = await self.get_find(find_id)
        ensure_owner(find, user_id, action="delete")

        if self.storage.is_under(find.image_url, analysis_prefix(find.user_id)):
            await self.storage.delete_quietly([find.image_url])
        else:
            logger.warning("Kept image outside the owner's prefix", find_id=str(find_id), image_url=find.image_url)
        await self.repo.delete(find.id)

        logger.info("Find deleted", find_id=str(find_id), user_id=str(user_id))

    # ═══════════════════════════════════════════════════════════════════════════
    # ANALYSIS PIPELINES
    # ═══════════════════════════════════════════════════════════════════════════

    async def analyze_wild_find(
        self,
        user_id: UUID,
        image: UploadedFile,
        analysis: AnalysisService,
    ) -> AnalyzeWildFindResponse:
        """
        Identify the main item in a photo and assess it.

        The image is stored first so the result can be saved as a Wild Find
        without a second upload.

        Raises:
            NothingIdentifiedError: No equipment in the photo
        """

        async def run() -> AnalyzeWildFindResponse:
            candidates = await analysis.identify(image)
            if not candidates:
                raise NothingIdentifiedError()
            result = await analysis.analyze(candidates[0], [image])
            return AnalyzeWildFindResponse(image_url=image_url, analysis=result.to_wild_find_analysis())

        image_url = await self._store(user_id, image)
        return await self._discard_on_failure(image_url, run)

    async def analyze_ad_listing(
        self,
        user_id: UUID,
        image: UploadedFile,
        title: str,
        description: str,
        asking_price: float,
        ad_url: Optional[str],
        analysis: AnalysisService,
    ) -> AnalyzeAdListingResponse:
        """Store the listing photo and run the ad pipeline."""

        async def run() -> AnalyzeAdListingResponse:
            result = await analysis.analyze_ad_listing(image, title, description, asking_price, ad_url)
            return AnalyzeAdListingResponse(image_url=image_url, analysis=result)

        image_url = await self._store(user_id, image)
        return await self._discard_on_failure(image_url, run)

    async def _store(self, user_id: UUID, image: UploadedFile) -> str:
        return await self.storage.upload_image(
            image,
            prefix=analysis_prefix(user_id),
            max_bytes=settings.MAX_ANALYSIS_IMAGE_BYTES,
        )

    async def _discard_on_failure(
        self,
        image_url: str,
        pipeline: Callable[[], Awaitable[ResultT]],
    ) -> ResultT:
        try:
            return await pipeline()
        except Exception:
            logger.info("Analysis failed, removing stored image", image_url=image_url)
            await self.storage.delete_quietly([image_url])
            raise
