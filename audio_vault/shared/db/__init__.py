"""
Database Module

Database connectivity and session management.

Components:
===========
- session.py: Database engine, session factory, and lifecycle functions

Usage in FastAPI:
=================
    from fastapi import Depends
    from audio_vault.shared.db import get_db
    from audio_vault.shared.repositories import UserRepository

    @app.get("/users/{user_id}")
    async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
        repo = UserRepository(db)
        return await repo.get(user_id)
"""

from audio_vault.shared.db.session import (
    get_db,
    init_db,
    close_db,
    build_engine,
    build_session_factory,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "build_engine",
    "build_session_factory",
    "AsyncSessionLocal",
    "engine",
]
