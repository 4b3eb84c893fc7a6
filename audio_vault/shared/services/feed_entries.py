"""
Feed Entry Mappers

One mapping function per source type. The feed and the dashboard both build
their cards through these, so titles, tags and links stay identical
everywhere a feed-like list is shown.

    AudioItem ──entry_from_audio_item──┐
                                       ├──▶ FeedEntry
    WildFind  ──entry_from_wild_find───┘

Titles:
=======
    AudioItem               "{make} {model}"
    WildFind (Wild Find)    analysis.identifiedItem    or "Wild Find"
    WildFind (Ad Analysis)  "{identifiedMake} {identifiedModel}" or "Unknown Item"
"""

from typing import Iterable, Optional

from audio_vault.shared.models.audio_item import AudioItem
from audio_vault.shared.models.enums import FindType
from audio_vault.shared.models.user import User
from audio_vault.shared.models.wild_find import WildFind
from audio_vault.shared.schemas.feed import FeedEntry, FeedUser


PLACEHOLDER_IMAGE_URL = "https://placehold.co/600x400/e2e8f0/4a5568?text=No+Image"
MY_COLLECTION_TAG = "My Collection"


def _feed_user(user: Optional[User]) -> Optional[FeedUser]:
    if user is None:
        return None
    return FeedUser(id=user.id, username=user.username)


def entry_from_audio_item(
    item: AudioItem,
    owner: Optional[User] = None,
    tag: Optional[str] = None,
) -> FeedEntry:
    """
    Card for a catalog item.

    Args:
        item: The item
        owner: Owning user; read from item.user when not given, which must
            then be loaded already
        tag: Card label; defaults to the item's status
    """
    return FeedEntry(
        id=item.id,
        title=item.title,
        image_url=item.photo_urls[0] if item.photo_urls else PLACEHOLDER_IMAGE_URL,
        tag=tag or item.status.value,
        detail_path=f"/item/{item.id}",
        created_at=item.created_at,
        user=_feed_user(owner if owner is not None else item.user),
    )


def wild_find_title(find: WildFind) -> str:
    if find.find_type == FindType.AD_ANALYSIS:
        ad = find.ad_analysis or {}
        title = f"{ad.get('identifiedMake') or ''} {ad.get('identifiedModel') or ''}".strip()
        return title or "Unknown Item"

    analysis = find.analysis or {}
    return analysis.get("identifiedItem") or "Wild Find"


def entry_from_wild_find(find: WildFind, owner: Optional[User] = None) -> FeedEntry:
    """Card for a saved analysis; the tag is the find type."""
    return FeedEntry(
        id=find.id,
        title=wild_find_title(find),
        image_url=find.image_url or PLACEHOLDER_IMAGE_URL,
        tag=find.find_type.value,
        detail_path=f"/saved-finds/{find.id}",
        created_at=find.created_at,
        user=_feed_user(owner if owner is not None else find.user),
    )


def newest_first(entries: Iterable[FeedEntry]) -> list[FeedEntry]:
    """Sort by created_at descending. Ties keep no particular order."""
    return sorted(entries, key=lambda entry: entry.created_at, reverse=True)
