"""
Audio Item Entity Model

A catalog entry for one piece of equipment, owned by exactly one user.

Model Hierarchy:
================
    User
       └── audio_items (AudioItem[])

SAMPLE ITEM RECORD:
┌─────────────────────────────────────────────────────────────────────────────┐
│ id                  │ 7c9e6679-7425-40de-944b-e07fc1f90ae7                   │
│ user_id             │ 550e8400-e29b-41d4-a716-446655440000                   │
│ make / model        │ Pioneer / SX-780                                      │
│ item_type           │ Receiver                                              │
│ condition           │ Good                                                  │
│ privacy             │ Public                                                │
│ photo_urls          │ ["https://bucket.s3.../audio-items/1700000000-sx.jpg"] │
│ ai_value_insight    │ {"estimatedValueUSD": "$250 - $350", ...}             │
└─────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from audio_vault.shared.models.base import Base, TimestampMixin
from audio_vault.shared.models.enums import ItemCondition, ItemPrivacy, ItemStatus, ItemType


if TYPE_CHECKING:
    from audio_vault.shared.models.user import User


def _labels(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class AudioItem(Base, TimestampMixin):
    """
    Catalog entry owned by a single user.

    Ownership is the user_id column; only the owner may modify or delete the
    row. Non-owners only ever see items whose privacy is Public.
    """

    __tablename__ = "audio_items"
    __table_args__ = (
        CheckConstraint("asking_price IS NULL OR asking_price >= 0", name="ck_audio_items_asking_price"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY & OWNERSHIP
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[ItemStatus] = mapped_column(
        SQLEnum(ItemStatus, name="item_status", values_callable=_labels),
        nullable=False,
        default=ItemStatus.PERSONAL_COLLECTION,
    )

    privacy: Mapped[ItemPrivacy] = mapped_column(
        SQLEnum(ItemPrivacy, name="item_privacy", values_callable=_labels),
        nullable=False,
        default=ItemPrivacy.PUBLIC,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # DESCRIPTION
    # ═══════════════════════════════════════════════════════════════════════════

    make: Mapped[str] = mapped_column(String(50), nullable=False)
    model: Mapped[str] = mapped_column(String(50), nullable=False)

    item_type: Mapped[ItemType] = mapped_column(
        SQLEnum(ItemType, name="item_type", values_callable=_labels),
        nullable=False,
    )

    condition: Mapped[ItemCondition] = mapped_column(
        SQLEnum(ItemCondition, name="item_condition", values_callable=_labels),
        nullable=False,
    )

    is_fully_functional: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    issues_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    specifications: Mapped[str] = mapped_column(Text, nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Absolute URLs into object storage
    photo_urls: Mapped[list[str]] = mapped_column(nullable=False, default=list)

    # ═══════════════════════════════════════════════════════════════════════════
    # PURCHASE & VALUE
    # ═══════════════════════════════════════════════════════════════════════════

    purchase_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    purchase_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    user_estimated_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    user_estimated_value_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # SALE
    # ═══════════════════════════════════════════════════════════════════════════

    is_for_sale: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    asking_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    sale_notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # AI EVALUATION
    # ═══════════════════════════════════════════════════════════════════════════

    ai_value_insight: Mapped[Optional[dict[str, Any]]] = mapped_column(nullable=True)
    ai_suggestions: Mapped[Optional[dict[str, Any]]] = mapped_column(nullable=True)
    ai_last_evaluated: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["User"] = relationship("User", back_populates="audio_items")

    @property
    def title(self) -> str:
        """Display title used in feeds and galleries."""
        return f"{self.make} {self.model}"

    def __repr__(self) -> str:
        return f"<AudioItem(id={self.id}, make={self.make}, model={self.model})>"
