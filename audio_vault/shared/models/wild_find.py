"""
Wild Find Entity Model

A saved AI analysis. Two kinds share the table:

- Wild Find: photo scan of equipment found in the wild; the result lives in
  `analysis` (identifiedItem, visualCondition, estimatedValue,
  detailedAnalysis, potentialIssues, restorationTips, disclaimer).
- Ad Analysis: evaluation of someone else's sale listing; the consolidated
  result lives in `ad_analysis`, with the listing URL and price alongside.

Both payloads are schema-light JSON produced by the AI gateway.
"""

from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import Enum as SQLEnum, Float, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from audio_vault.shared.models.base import Base, TimestampMixin
from audio_vault.shared.models.enums import FindType


if TYPE_CHECKING:
    from audio_vault.shared.models.user import User


class WildFind(Base, TimestampMixin):
    """Saved AI analysis owned by a single user."""

    __tablename__ = "wild_finds"

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

    find_type: Mapped[FindType] = mapped_column(
        SQLEnum(FindType, name="find_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=FindType.WILD_FIND,
    )

    image_url: Mapped[str] = mapped_column(Text, nullable=False)

    # Ad Analysis only
    source_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    asking_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    ad_analysis: Mapped[Optional[dict[str, Any]]] = mapped_column(nullable=True)

    # Wild Find only
    analysis: Mapped[Optional[dict[str, Any]]] = mapped_column(nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="wild_finds")

    def __repr__(self) -> str:
        return f"<WildFind(id={self.id}, type={self.find_type.value})>"
