"""
Authentication Dependencies

FastAPI dependencies for user authentication.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← Extract and validate JWT from header
           │
           ▼
    get_current_user()        ← Load the user the token was issued for

Type Aliases:
=============
    CurrentUser - Authenticated User model instance

Usage:
======
    from audio_vault.api.dependencies.auth import CurrentUser

    @router.get("/me")
    async def get_me(current_user: CurrentUser):
        return current_user
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from audio_vault.api.dependencies.database import DbSession
from audio_vault.config.settings import settings
from audio_vault.shared.core.exceptions import AuthenticationError
from audio_vault.shared.models.user import User
from audio_vault.shared.repositories.user_repository import UserRepository
from audio_vault.shared.utils.security import SecurityUtils


# Missing header → AuthenticationError (401 with the standard error body),
# not FastAPI's bare 403.
security = HTTPBearer(auto_error=False)


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> dict:
    """
    Extract and validate JWT token from Authorization header.

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is missing or invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    try:
        return SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def get_current_user(
    token: Annotated[dict, Depends(get_current_user_token)],
    db: DbSession,
) -> User:
    """
    Load the user the token belongs to.

    Raises:
        AuthenticationError: If the payload has no user_id or the user is gone
    """
    try:
        user_id = UUID(str(token.get("user_id")))
    except ValueError as e:
        raise AuthenticationError("Invalid token payload") from e

    user = await UserRepository(db).get(user_id)
    if not user:
        raise AuthenticationError("User no longer exists")

    return user


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUser = Annotated[User, Depends(get_current_user)]
