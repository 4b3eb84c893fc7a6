"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy (under settings.API_PREFIX, "/api" by default):
================================================================
    /health-check, /health  → Health check endpoints
    /auth                   → Authentication (register, login)
    /items                  → Audio items, discover, AI analysis
    /users                  → Account, follow graph, feed, profiles
    /wild-finds             → Saved AI analyses

Usage:
======
    from audio_vault.api.routes import register_routes

    app = FastAPI()
    register_routes(app, prefix="/api")
"""

from fastapi import FastAPI

from audio_vault.api.handlers import (
    auth_handler,
    health_handler,
    item_handler,
    user_handler,
    wild_find_handler,
)


def register_routes(app: FastAPI, prefix: str = "") -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
        prefix: Common path prefix for every router
    """
    # Health check endpoints
    app.include_router(
        health_handler.router,
        prefix=prefix,
        tags=["Health"],
    )

    # Authentication endpoints
    app.include_router(
        auth_handler.router,
        prefix=f"{prefix}/auth",
        tags=["Authentication"],
    )

    # Audio items and AI analysis
    app.include_router(
        item_handler.router,
        prefix=f"{prefix}/items",
        tags=["Items"],
    )

    # Users, follow graph and feed
    app.include_router(
        user_handler.router,
        prefix=f"{prefix}/users",
        tags=["Users"],
    )

    # Saved finds
    app.include_router(
        wild_find_handler.router,
        prefix=f"{prefix}/wild-finds",
        tags=["Wild Finds"],
    )
