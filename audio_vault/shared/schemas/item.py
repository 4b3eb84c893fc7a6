"""
Audio Item Schemas

Request/response models for /api/items.

Item payloads arrive either as JSON or as multipart form fields next to the
photo files. Form fields are always strings, so the request schemas lean on
pydantic's lax coercion ("true" → True, "350" → 350.0, "1979-05-01" → date)
and turn empty strings into None for the optional fields.

Request Flow:
=============
    multipart/form-data or JSON
        │
        ▼
    AudioItemCreate / AudioItemUpdate     ← field validation
        │
        ▼
    ItemService                           ← ownership, photos, persistence
        │
        ▼
    AudioItemResponse                     ← camelCase JSON
"""

from datetime import date, datetime
import json
from typing import Any, Optional
from uuid import UUID

from pydantic import Field, field_validator

from audio_vault.shared.models.enums import ItemCondition, ItemPrivacy, ItemStatus, ItemType
from audio_vault.shared.schemas.common import BaseSchema


_OPTIONAL_SCALARS = (
    "purchase_date",
    "purchase_price",
    "user_estimated_value",
    "user_estimated_value_date",
    "asking_price",
    "sale_notes",
)


class ItemOwner(BaseSchema):
    """Owner summary attached to items shown outside the owner's own views."""

    id: UUID
    username: str


# ═══════════════════════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class AudioItemCreate(BaseSchema):
    """Fields accepted when adding an item to the catalog."""

    make: str = Field(min_length=1, max_length=50)
    model: str = Field(min_length=1, max_length=50)
    item_type: ItemType
    condition: ItemCondition
    is_fully_functional: bool = True
    issues_description: str = ""
    specifications: str = ""
    notes: str = ""
    status: ItemStatus = ItemStatus.PERSONAL_COLLECTION
    privacy: ItemPrivacy = ItemPrivacy.PUBLIC
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = Field(default=None, ge=0)
    user_estimated_value: Optional[float] = Field(default=None, ge=0)
    user_estimated_value_date: Optional[date] = None
    is_for_sale: bool = False
    asking_price: Optional[float] = Field(default=None, ge=0)
    sale_notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("make", "model", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator(*_OPTIONAL_SCALARS, mode="before")
    @classmethod
    def empty_string_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AudioItemUpdate(BaseSchema):
    """
    Updatable fields of an item.

    Only the fields declared here can change; anything else in the request
    body is ignored. Fields the client did not send stay as they are.

    `existing_photo_urls` is the list of already stored photos to keep, sent
    either as a JSON array or, in multipart requests, as a JSON-encoded
    string.
    """

    make: Optional[str] = Field(default=None, min_length=1, max_length=50)
    model: Optional[str] = Field(default=None, min_length=1, max_length=50)
    item_type: Optional[ItemType] = None
    condition: Optional[ItemCondition] = None
    is_fully_functional: Optional[bool] = None
    issues_description: Optional[str] = None
    specifications: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[ItemStatus] = None
    privacy: Optional[ItemPrivacy] = None
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = Field(default=None, ge=0)
    user_estimated_value: Optional[float] = Field(default=None, ge=0)
    user_estimated_value_date: Optional[date] = None
    is_for_sale: Optional[bool] = None
    asking_price: Optional[float] = Field(default=None, ge=0)
    sale_notes: Optional[str] = Field(default=None, max_length=500)
    existing_photo_urls: Optional[list[str]] = None

    @field_validator("make", "model", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator(*_OPTIONAL_SCALARS, mode="before")
    @classmethod
    def empty_string_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("existing_photo_urls", mode="before")
    @classmethod
    def parse_photo_list(cls, value):
        if isinstance(value, str):
            if not value.strip():
                return []
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError:
                # A single plain URL sent as one form field
                return [value.strip()]
            return [parsed] if isinstance(parsed, str) else parsed
        return value

    def changes(self) -> dict[str, Any]:
        """
        Column values the client actually sent, photo list excluded.

        An explicit null only clears optional columns; it is dropped for
        columns that cannot be empty.
        """
        sent = self.model_dump(exclude_unset=True, exclude={"existing_photo_urls"})
        return {
            field: value
            for field, value in sent.items()
            if value is not None or field in _OPTIONAL_SCALARS
        }


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class AudioItemResponse(BaseSchema):
    """Full item representation."""

    id: UUID
    user_id: UUID
    make: str
    model: str
    item_type: ItemType
    condition: ItemCondition
    is_fully_functional: bool
    issues_description: str
    specifications: str
    notes: str
    status: ItemStatus
    privacy: ItemPrivacy
    photo_urls: list[str]
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = None
    user_estimated_value: Optional[float] = None
    user_estimated_value_date: Optional[date] = None
    is_for_sale: bool
    asking_price: Optional[float] = None
    sale_notes: Optional[str] = None
    ai_value_insight: Optional[dict[str, Any]] = None
    ai_suggestions: Optional[dict[str, Any]] = None
    ai_last_evaluated: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class DiscoverItemResponse(AudioItemResponse):
    """Item with its owner, as listed on the discover page."""

    user: ItemOwner
