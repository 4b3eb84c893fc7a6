"""
Feed card mappers.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from audio_vault.shared.models.audio_item import AudioItem
from audio_vault.shared.models.enums import FindType, ItemStatus
from audio_vault.shared.models.user import User
from audio_vault.shared.models.wild_find import WildFind
from audio_vault.shared.services.feed_entries import (
    MY_COLLECTION_TAG,
    PLACEHOLDER_IMAGE_URL,
    entry_from_audio_item,
    entry_from_wild_find,
    newest_first,
)


NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _owner() -> User:
    return User(id=uuid4(), username="hifi_hunter", email="h@example.com", password_hash="x")


def _item(**overrides) -> AudioItem:
    values = dict(
        id=uuid4(),
        user_id=uuid4(),
        make="McIntosh",
        model="MC275",
        status=ItemStatus.FOR_SALE,
        photo_urls=[],
        created_at=NOW,
    )
    values.update(overrides)
    return AudioItem(**values)


def test_item_card_defaults():
    item = _item()
    entry = entry_from_audio_item(item)

    assert entry.title == "McIntosh MC275"
    assert entry.image_url == PLACEHOLDER_IMAGE_URL
    assert entry.tag == "For Sale"
    assert entry.detail_path == f"/item/{item.id}"
    assert entry.user is None


def test_item_card_uses_first_photo_owner_and_tag():
    owner = _owner()
    item = _item(photo_urls=["https://photos.test/a.jpg", "https://photos.test/b.jpg"])

    entry = entry_from_audio_item(item, owner=owner, tag=MY_COLLECTION_TAG)

    assert entry.image_url == "https://photos.test/a.jpg"
    assert entry.tag == "My Collection"
    assert entry.user.id == owner.id
    assert entry.user.username == "hifi_hunter"


def test_wild_find_card():
    find = WildFind(
        id=uuid4(),
        user_id=uuid4(),
        find_type=FindType.WILD_FIND,
        image_url="https://photos.test/find.jpg",
        analysis={"identifiedItem": "Thorens TD-124"},
        created_at=NOW,
    )

    entry = entry_from_wild_find(find)

    assert entry.title == "Thorens TD-124"
    assert entry.tag == "Wild Find"
    assert entry.image_url == "https://photos.test/find.jpg"
    assert entry.detail_path == f"/saved-finds/{find.id}"


def test_ad_analysis_card_titles():
    named = WildFind(
        id=uuid4(),
        user_id=uuid4(),
        find_type=FindType.AD_ANALYSIS,
        image_url="https://photos.test/ad.jpg",
        ad_analysis={"identifiedMake": "Sansui", "identifiedModel": "AU-717"},
        created_at=NOW,
    )
    unnamed = WildFind(
        id=uuid4(),
        user_id=uuid4(),
        find_type=FindType.AD_ANALYSIS,
        image_url="",
        ad_analysis={},
        created_at=NOW,
    )

    assert entry_from_wild_find(named).title == "Sansui AU-717"
    assert entry_from_wild_find(named).tag == "Ad Analysis"
    assert entry_from_wild_find(unnamed).title == "Unknown Item"
    assert entry_from_wild_find(unnamed).image_url == PLACEHOLDER_IMAGE_URL


def test_newest_first():
    older = entry_from_audio_item(_item(created_at=NOW - timedelta(days=1)))
    newer = entry_from_audio_item(_item(created_at=NOW))

    assert newest_first([older, newer]) == [newer, older]
