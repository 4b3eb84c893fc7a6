"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser
- Adapters: get_storage(), get_openai()
- Pagination: get_pagination(), Pagination
- Services: get_*_service() functions

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user)
    ):

    # Write this:
    async def handler(db: DbSession, user: CurrentUser):

Usage:
======
    from audio_vault.api.dependencies import CurrentUser

    @router.get("/items")
    async def list_items(current_user: CurrentUser, item_service: ItemService = Depends(get_item_service)):
        return await item_service.list_own_items(current_user.id)
"""

from audio_vault.api.dependencies.database import (
    get_db,
    DbSession,
)
from audio_vault.api.dependencies.auth import (
    get_current_user,
    get_current_user_token,
    CurrentUser,
)
from audio_vault.api.dependencies.adapters import (
    get_openai,
    get_storage,
)
from audio_vault.api.dependencies.pagination import (
    get_pagination,
    Pagination,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_current_user_token",
    "CurrentUser",
    # Adapters
    "get_openai",
    "get_storage",
    # Pagination
    "get_pagination",
    "Pagination",
]
