"""
Base Repository

Generic CRUD operations shared by every entity repository.

What This Provides:
===================
- get(id)        → Fetch single record by UUID
- get_by_ids()   → Fetch multiple records by UUIDs
- create()       → Insert new record
- save()         → Flush attribute changes made on a loaded instance
- delete()       → Hard delete record

Generic Type Pattern:
=====================
    class AudioItemRepository(BaseRepository[AudioItem]):
        def __init__(self, session: AsyncSession):
            super().__init__(AudioItem, session)

    repo = AudioItemRepository(db)
    item = await repo.get(item_id)  # AudioItem | None

flush() vs commit():
====================
Repository methods only flush. The request-scoped session from get_db()
commits once the handler returns, or rolls everything back when it raises,
so several repository calls in one request form a single transaction.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        SQL Generated:
            SELECT * FROM audio_items WHERE id = '7c9e6679-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, ids: list[UUID]) -> list[ModelType]:
        """
        Get multiple records by their UUIDs in a single IN query.

        Returns fewer records than requested when some ids do not exist.
        """
        if not ids:
            return []

        result = await self.session.execute(select(self.model).where(self.model.id.in_(ids)))
        return list(result.scalars().all())

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        The INSERT is flushed immediately so the returned instance carries its
        generated id and column defaults.
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def save(self, instance: ModelType) -> ModelType:
        """Flush changes already applied to a loaded instance."""
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, record_id: UUID) -> bool:
        """
        Hard delete a record by ID.

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True
