"""Initial schema: user profiles, vendors, categories, favorites, reviews, messaging, admin log.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "user_profiles",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="customer"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_user_profiles_email", "user_profiles", ["email"], unique=True)

    op.create_table(
        "vendor_profiles",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True, unique=True),
        sa.Column("business_name", sa.String(255), nullable=True),
        sa.Column("profile_title", sa.String(255), nullable=True),
        sa.Column("about", sa.Text(), nullable=True),
        sa.Column("profile_photo_url", sa.String(1000), nullable=True),
        sa.Column("cover_photo_url", sa.String(1000), nullable=True),
        sa.Column("offers_virtual_services", sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column("offers_in_person_services", sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column("hourly_rate", sa.Float(), nullable=True),
        sa.Column("service_categories", postgresql.ARRAY(sa.String()), nullable=True, server_default="{}"),
        sa.Column("zip_code", sa.String(20), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("service_radius", sa.Integer(), nullable=True),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("allow_phone_contact", sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column("admin_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_by", sa.UUID(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_vendor_profiles_admin_approved", "vendor_profiles", ["admin_approved"])
    op.create_index(
        "ix_vendor_profiles_service_categories",
        "vendor_profiles",
        ["service_categories"],
        postgresql_using="gin",
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon_url", sa.String(1000), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("parent_id", sa.UUID(), sa.ForeignKey("categories.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_by", sa.UUID(), nullable=True),
        sa.Column("updated_by", sa.UUID(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "user_vendor_favorites",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("vendor_id", sa.UUID(), sa.ForeignKey("vendor_profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index(
        "ix_user_vendor_favorites_user_vendor",
        "user_vendor_favorites",
        ["user_id", "vendor_id"],
        unique=True,
    )

    op.create_table(
        "reviews",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("vendor_id", sa.UUID(), sa.ForeignKey("vendor_profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_by", sa.UUID(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
    )
    op.create_index("ix_reviews_user_vendor", "reviews", ["user_id", "vendor_id"], unique=True)
    op.create_index("ix_reviews_vendor_approved", "reviews", ["vendor_id", "approved"])

    op.create_table(
        "conversations",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("customer_id", sa.UUID(), sa.ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("vendor_id", sa.UUID(), sa.ForeignKey("vendor_profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("last_message_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("customer_unread_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("vendor_unread_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index(
        "ix_conversations_customer_vendor",
        "conversations",
        ["customer_id", "vendor_id"],
        unique=True,
    )

    op.create_table(
        "messages",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("conversation_id", sa.UUID(), sa.ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sender_id", sa.UUID(), sa.ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("message_type", sa.String(20), nullable=False, server_default="text"),
        sa.Column("attachment_url", sa.String(1000), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_messages_conversation_created", "messages", ["conversation_id", "created_at"])

    op.create_table(
        "admin_activity_log",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("admin_id", sa.UUID(), sa.ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("table_name", sa.String(100), nullable=False),
        sa.Column("record_id", sa.UUID(), nullable=True),
        sa.Column("old_values", postgresql.JSONB(), nullable=True),
        sa.Column("new_values", postgresql.JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_admin_activity_log_admin_id", "admin_activity_log", ["admin_id"])


def downgrade() -> None:
    op.drop_table("admin_activity_log")
    op.drop_table("messages")
    op.drop_table("conversations")
    op.drop_table("reviews")
    op.drop_table("user_vendor_favorites")
    op.drop_table("categories")
    op.drop_table("vendor_profiles")
    op.drop_table("user_profiles")
