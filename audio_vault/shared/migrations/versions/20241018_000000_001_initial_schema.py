# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2024-10-18 00:00:00

Tables created:
- users: User accounts
- user_follows: Follow edges (follower → followee), one row per edge
- audio_items: Catalog entries
- wild_finds: Saved AI analyses (Wild Finds and Ad Analyses)

Enums created:
- item_status: Personal Collection, For Sale, For Trade
- item_privacy: Public, Private
- item_type: Receiver, Turntable, Speakers, ...
- item_condition: Mint, Near Mint, ...
- find_type: Wild Find, Ad Analysis
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ITEM_STATUS = ("Personal Collection", "For Sale", "For Trade")
ITEM_PRIVACY = ("Public", "Private")
ITEM_TYPE = (
    "Receiver",
    "Turntable",
    "Speakers",
    "Amplifier",
    "Pre-amplifier",
    "Tape Deck",
    "CD Player",
    "Equalizer",
    "Tuner",
    "Integrated Amplifier",
    "Other",
)
ITEM_CONDITION = (
    "Mint",
    "Near Mint",
    "Excellent",
    "Very Good",
    "Good",
    "Fair",
    "For Parts/Not Working",
    "Restored",
)
FIND_TYPE = ("Wild Find", "Ad Analysis")

# Enum types (created explicitly below, so create_type=False here)
item_status_enum = postgresql.ENUM(*ITEM_STATUS, name="item_status", create_type=False)
item_privacy_enum = postgresql.ENUM(*ITEM_PRIVACY, name="item_privacy", create_type=False)
item_type_enum = postgresql.ENUM(*ITEM_TYPE, name="item_type", create_type=False)
item_condition_enum = postgresql.ENUM(*ITEM_CONDITION, name="item_condition", create_type=False)
find_type_enum = postgresql.ENUM(*FIND_TYPE, name="find_type", create_type=False)

ALL_ENUMS = (item_status_enum, item_privacy_enum, item_type_enum, item_condition_enum, find_type_enum)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _owner_column() -> sa.Column:
    return sa.Column(
        "user_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def upgrade() -> None:
    """Upgrade database schema."""
    bind = op.get_bind()
    for enum in ALL_ENUMS:
        enum.create(bind, checkfirst=True)

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(20), nullable=False, unique=True, index=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("is_collection_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    # Create user_follows table: one row per follow edge
    op.create_table(
        "user_follows",
        sa.Column(
            "follower_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "followee_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )

    # Create audio_items table
    op.create_table(
        "audio_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("status", item_status_enum, nullable=False, server_default="Personal Collection"),
        sa.Column("privacy", item_privacy_enum, nullable=False, server_default="Public", index=True),
        sa.Column("make", sa.String(50), nullable=False),
        sa.Column("model", sa.String(50), nullable=False),
        sa.Column("item_type", item_type_enum, nullable=False),
        sa.Column("condition", item_condition_enum, nullable=False),
        sa.Column("is_fully_functional", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("issues_description", sa.Text(), nullable=False, server_default=""),
        sa.Column("specifications", sa.Text(), nullable=False, server_default=""),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("photo_urls", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("purchase_price", sa.Float(), nullable=True),
        sa.Column("user_estimated_value", sa.Float(), nullable=True),
        sa.Column("user_estimated_value_date", sa.Date(), nullable=True),
        sa.Column("is_for_sale", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("asking_price", sa.Float(), nullable=True),
        sa.Column("sale_notes", sa.String(500), nullable=True),
        sa.Column("ai_value_insight", postgresql.JSONB(), nullable=True),
        sa.Column("ai_suggestions", postgresql.JSONB(), nullable=True),
        sa.Column("ai_last_evaluated", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("asking_price IS NULL OR asking_price >= 0", name="ck_audio_items_asking_price"),
    )

    # Create wild_finds table
    op.create_table(
        "wild_finds",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("find_type", find_type_enum, nullable=False, server_default="Wild Find"),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("source_url", sa.Text(), nullable=True),
        sa.Column("asking_price", sa.Float(), nullable=True),
        sa.Column("ad_analysis", postgresql.JSONB(), nullable=True),
        sa.Column("analysis", postgresql.JSONB(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    # Drop tables in reverse order (respect foreign keys)
    op.drop_table("wild_finds")
    op.drop_table("audio_items")
    op.drop_table("user_follows")
    op.drop_table("users")

    # Drop enum types
    bind = op.get_bind()
    for enum in reversed(ALL_ENUMS):
        enum.drop(bind, checkfirst=True)
