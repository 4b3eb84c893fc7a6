"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD operations
         │
         ├── UserRepository             ← Lookup by e-mail / username
         ├── AudioItemRepository        ← Owner, fan-out and discover queries
         └── WildFindRepository         ← Saved AI analyses

    FollowRepository                    ← Follow edges (composite key, no base)

Usage Example:
==============
    from audio_vault.shared.repositories import AudioItemRepository

    repo = AudioItemRepository(db)
    items = await repo.list_by_owner(user.id)
"""

from audio_vault.shared.repositories.base import BaseRepository
from audio_vault.shared.repositories.user_repository import UserRepository
from audio_vault.shared.repositories.follow_repository import FollowRepository
from audio_vault.shared.repositories.audio_item_repository import AudioItemRepository
from audio_vault.shared.repositories.wild_find_repository import WildFindRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "FollowRepository",
    "AudioItemRepository",
    "WildFindRepository",
]
