"""
SQLAlchemy Models

Model Hierarchy:
================
    User
       ├── audio_items (AudioItem[])
       ├── wild_finds (WildFind[])
       └── Follow (follower_id → followee_id edges)

Usage:
======
    from audio_vault.shared.models import User, AudioItem, WildFind, Follow
"""

from audio_vault.shared.models.base import Base, TimestampMixin
from audio_vault.shared.models.enums import (
    FindType,
    ItemCondition,
    ItemPrivacy,
    ItemStatus,
    ItemType,
)
from audio_vault.shared.models.user import User
from audio_vault.shared.models.follow import Follow
from audio_vault.shared.models.audio_item import AudioItem
from audio_vault.shared.models.wild_find import WildFind

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "FindType",
    "ItemCondition",
    "ItemPrivacy",
    "ItemStatus",
    "ItemType",
    # Core models
    "User",
    "Follow",
    "AudioItem",
    "WildFind",
]
