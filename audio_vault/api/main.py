"""
Vintage Audio Vault API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        VINTAGE AUDIO VAULT API                              │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                    Middleware Stack                          │          │
│   │  ┌─────────────────────────────────────────────────────┐    │          │
│   │  │ CORS Middleware                                      │    │          │
│   │  │ Request Logging (request_id in log context)          │    │          │
│   │  │ Error Handlers                                       │    │          │
│   │  └─────────────────────────────────────────────────────┘    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                    Routers (/api)                            │          │
│   │  ┌────────┐ ┌──────┐ ┌───────┐ ┌───────┐ ┌────────────┐    │          │
│   │  │ Health │ │ Auth │ │ Items │ │ Users │ │ Wild Finds │    │          │
│   │  └────────┘ └──────┘ └───────┘ └───────┘ └────────────┘    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                Dependencies (Injected)                       │          │
│   │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌───────────────┐  │          │
│   │  │ Database │ │   Auth   │ │ Services │ │ app.state     │  │          │
│   │  │          │ │          │ │          │ │ (S3, OpenAI)  │  │          │
│   │  └──────────┘ └──────────┘ └──────────┘ └───────────────┘  │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connection verified
3. Keep-alive pinger started (when KEEPALIVE_URL is set)
4. Application serves requests
5. Application stops → pinger cancelled, database connections closed

Usage:
======
    # Run with uvicorn
    uvicorn audio_vault.api.main:app --host 0.0.0.0 --port 5000 --reload

    # Or programmatically, with fake clients in tests
    from audio_vault.api.main import create_application
    app = create_application(storage_adapter=FakeStorage(), openai_adapter=FakeOpenAI())
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from audio_vault.config.settings import settings
from audio_vault.shared.adapters.openai_adapter import OpenAIAdapter, get_openai_adapter
from audio_vault.shared.adapters.storage_adapter import StorageAdapter, get_storage_adapter
from audio_vault.shared.db import close_db, init_db
from audio_vault.shared.core.logging import logger
from audio_vault.api.middleware import RequestLoggingMiddleware, setup_exception_handlers
from audio_vault.api.routes import register_routes
from audio_vault.worker.keepalive import start_keepalive


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Verify the database connection
    - Start the keep-alive pinger

    Shutdown:
    - Stop the pinger
    - Close database connections
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info(
        "Starting Vintage Audio Vault API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    await init_db()

    keepalive = start_keepalive(settings.KEEPALIVE_URL, settings.KEEPALIVE_INTERVAL_SECONDS)
    if keepalive is None:
        logger.info("Keep-alive pinger disabled")

    logger.info("Vintage Audio Vault API started successfully")

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down Vintage Audio Vault API")

    if keepalive is not None:
        keepalive.cancel()
        try:
            await keepalive
        except asyncio.CancelledError:
            pass

    await close_db()

    logger.info("Vintage Audio Vault API shutdown complete")


def create_application(
    *,
    storage_adapter: Optional[StorageAdapter] = None,
    openai_adapter: Optional[OpenAIAdapter] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        storage_adapter: Photo storage client; the S3 singleton when omitted
        openai_adapter: AI client; the OpenAI singleton when omitted

    Returns:
        Configured FastAPI application instance

    This factory function:
    1. Creates the FastAPI app with settings
    2. Attaches the external clients to app.state
    3. Adds middleware (CORS, request logging)
    4. Sets up exception handlers
    5. Registers all routes under settings.API_PREFIX
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Catalog, share and value vintage audio equipment",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        # Use lifespan for startup/shutdown
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXTERNAL CLIENTS
    # ═══════════════════════════════════════════════════════════════════════════

    app.state.storage_adapter = storage_adapter or get_storage_adapter()
    app.state.openai_adapter = openai_adapter or get_openai_adapter()

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(RequestLoggingMiddleware)

    # Added last so it wraps everything, including error responses
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app, prefix=settings.API_PREFIX)

    return app


# Create the application instance
app = create_application()
