"""
User Entity Model

Represents a registered collector.

Model Hierarchy:
================
    User
       ├── audio_items (AudioItem[])   - Catalog entries owned by the user
       ├── wild_finds (WildFind[])     - Saved AI analyses
       └── follow edges (Follow)       - following / followers, see models/follow.py

SAMPLE USER RECORD:
┌─────────────────────────────────────────────────────────────────────────────┐
│ id                  │ 550e8400-e29b-41d4-a716-446655440000                   │
│ username            │ hifi_hunter                                           │
│ email               │ collector@example.com                                 │
│ password_hash       │ $2b$12$LQv3c1yqBwEHxv...                              │
│ is_collection_public│ true                                                  │
└─────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Boolean, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from audio_vault.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from audio_vault.shared.models.audio_item import AudioItem
    from audio_vault.shared.models.wild_find import WildFind


class User(Base, TimestampMixin):
    """
    User model representing a registered collector.

    Attributes:
        id: Unique identifier (UUID v4)
        username: Public handle (unique)
        email: Login e-mail (unique, stored lower-cased)
        password_hash: Bcrypt hashed password
        is_collection_public: Whether the profile page lists public items
        is_verified: E-mail verification flag
        last_login: Timestamp of the last successful login
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    username: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE FLAGS
    # ═══════════════════════════════════════════════════════════════════════════

    is_collection_public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    last_login: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    audio_items: Mapped[list["AudioItem"]] = relationship(
        "AudioItem",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    wild_finds: Mapped[list["WildFind"]] = relationship(
        "WildFind",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, username={self.username})>"
