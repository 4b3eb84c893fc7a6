"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite, one shared
connection through StaticPool) and an application built with fake storage and
AI adapters. Requests go through httpx's ASGITransport, so no server is
started and the lifespan (database probe, keep-alive pinger) does not run.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from audio_vault.api.dependencies.database import get_db
from audio_vault.api.main import create_application
from audio_vault.shared.db import build_session_factory
from audio_vault.shared.models import Base

from tests.helpers import FakeOpenAI, FakeStorage


# ═══════════════════════════════════════════════════════════════════════════════
# DATABASE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


# ═══════════════════════════════════════════════════════════════════════════════
# APPLICATION
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def ai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def app(session_factory, storage, ai):
    application = create_application(storage_adapter=storage, openai_adapter=ai)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as http:
        yield http
