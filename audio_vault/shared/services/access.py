"""
Visibility & Ownership Rules

The one place that decides who may see or change an audio item or a saved
find. Every entry point that returns items to a non-owner (profile,
discover, feed, item detail) goes through these helpers.

Rules:
======
    change / delete        owner only                    → 403 otherwise
    read one item          owner, or privacy == Public   → 403 otherwise
    list someone's items   privacy == Public only
"""

from typing import Optional, Union
from uuid import UUID

from sqlalchemy import ColumnElement

from audio_vault.shared.core.exceptions import AuthorizationError
from audio_vault.shared.models.audio_item import AudioItem
from audio_vault.shared.models.enums import ItemPrivacy
from audio_vault.shared.models.wild_find import WildFind


Owned = Union[AudioItem, WildFind]


def is_owner(record: Owned, user_id: Optional[UUID]) -> bool:
    return user_id is not None and record.user_id == user_id


def ensure_owner(record: Owned, user_id: UUID, action: str = "modify") -> None:
    """
    Raise unless `user_id` owns the record.

    Raises:
        AuthorizationError: The caller is not the owner
    """
    if not is_owner(record, user_id):
        kind = "item" if isinstance(record, AudioItem) else "find"
        raise AuthorizationError(f"You do not have permission to {action} this {kind}")


def can_view_item(item: AudioItem, viewer_id: Optional[UUID]) -> bool:
    """Owners see everything they own; everyone else sees public items only."""
    return is_owner(item, viewer_id) or item.privacy == ItemPrivacy.PUBLIC


def ensure_can_view_item(item: AudioItem, viewer_id: Optional[UUID]) -> None:
    if not can_view_item(item, viewer_id):
        raise AuthorizationError("This item is private")


def public_items() -> ColumnElement[bool]:
    """SQL criterion for items visible to non-owners."""
    return AudioItem.privacy == ItemPrivacy.PUBLIC
