"""
Follow Edge Model

One row per follow relationship:

    follower_id ──follows──▶ followee_id

A user's "following" list is every row where they are the follower; their
"followers" list is every row where they are the followee. Both lists are
read from the same row, so they can never disagree with each other.
"""

from datetime import datetime
import uuid

from sqlalchemy import DateTime, ForeignKey, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from audio_vault.shared.models.base import Base, utcnow


class Follow(Base):
    """
    Directed follow edge between two users.

    Attributes:
        follower_id: User doing the following
        followee_id: User being followed
        created_at: When the edge was created
    """

    __tablename__ = "user_follows"

    follower_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    followee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Follow(follower={self.follower_id}, followee={self.followee_id})>"
