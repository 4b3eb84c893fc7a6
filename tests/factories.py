"""
Direct-to-database builders for service-level tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.shared.models.audio_item import AudioItem
from audio_vault.shared.models.enums import FindType, ItemCondition, ItemPrivacy, ItemType
from audio_vault.shared.models.user import User
from audio_vault.shared.models.wild_find import WildFind
from audio_vault.shared.repositories.audio_item_repository import AudioItemRepository
from audio_vault.shared.repositories.user_repository import UserRepository
from audio_vault.shared.repositories.wild_find_repository import WildFindRepository


BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def minutes_after_base(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


async def make_user(session: AsyncSession, username: str, **overrides: Any) -> User:
    values = {
        "email": f"{username}@example.com",
        "username": username,
        "password_hash": "not-a-real-hash",
    }
    values.update(overrides)
    return await UserRepository(session).create(**values)


async def make_item(
    session: AsyncSession,
    owner: User,
    make: str = "Marantz",
    model: str = "2270",
    privacy: ItemPrivacy = ItemPrivacy.PUBLIC,
    created_at: Optional[datetime] = None,
    **overrides: Any,
) -> AudioItem:
    values = {
        "user_id": owner.id,
        "make": make,
        "model": model,
        "item_type": ItemType.RECEIVER,
        "condition": ItemCondition.GOOD,
        "privacy": privacy,
        "photo_urls": [],
    }
    if created_at is not None:
        values["created_at"] = created_at
    values.update(overrides)
    return await AudioItemRepository(session).create(**values)


async def make_find(
    session: AsyncSession,
    owner: User,
    identified_item: str = "Technics SL-1200",
    created_at: Optional[datetime] = None,
) -> WildFind:
    values = {
        "user_id": owner.id,
        "find_type": FindType.WILD_FIND,
        "image_url": f"https://photos.test/wild-finds/{identified_item.replace(' ', '_')}.jpg",
        "analysis": {
            "identifiedItem": identified_item,
            "visualCondition": "Dusty but complete",
            "estimatedValue": "$300 - $450",
        },
    }
    if created_at is not None:
        values["created_at"] = created_at
    return await WildFindRepository(session).create(**values)
