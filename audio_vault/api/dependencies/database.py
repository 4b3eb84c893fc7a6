"""
Database Dependency

FastAPI dependency for database sessions.

Yields the request-scoped async session. The session is committed when the
handler returns and rolled back when anything raises, so a follow edge,
an item update or a saved find either lands completely or not at all.

Tests swap the database by overriding this function through
`app.dependency_overrides[get_db]`.

Usage:
======
    from audio_vault.api.dependencies.database import DbSession

    @router.get("/users/me")
    async def me(db: DbSession, current_user: CurrentUser):
        return await UserService(db).get_me(current_user)
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield the request's database session (commit on success, rollback on error)."""
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
