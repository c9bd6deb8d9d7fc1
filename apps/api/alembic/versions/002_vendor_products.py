"""Vendor products: services listed on a vendor profile.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "vendor_products",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "vendor_id",
            sa.UUID(),
            sa.ForeignKey("vendor_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("starting_price", sa.Float(), nullable=True),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("starting_price IS NULL OR starting_price >= 0", name="ck_vendor_products_price"),
    )
    op.create_index(
        "ix_vendor_products_vendor_order", "vendor_products", ["vendor_id", "display_order"]
    )


def downgrade() -> None:
    op.drop_index("ix_vendor_products_vendor_order", table_name="vendor_products")
    op.drop_table("vendor_products")
