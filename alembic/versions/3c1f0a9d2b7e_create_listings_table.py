"""Create listings table

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-18 10:02:41.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "listings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("make", sa.String(length=50), nullable=False),
        sa.Column("model", sa.String(length=50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("color", sa.String(length=30), nullable=True),
        sa.Column("fuel_type", sa.String(length=20), nullable=True),
        sa.Column("transmission", sa.String(length=20), nullable=True),
        sa.Column("body_type", sa.String(length=30), nullable=True),
        sa.Column("seats", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("images", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="AVAILABLE"),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=True,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=True,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("price >= 0", name="ck_listings_price_non_negative"),
        sa.CheckConstraint("mileage >= 0", name="ck_listings_mileage_non_negative"),
    )
    op.create_index("ix_listings_status_created_at", "listings", ["status", "created_at"])
    op.create_index("ix_listings_status_price", "listings", ["status", "price"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_listings_status_price", table_name="listings")
    op.drop_index("ix_listings_status_created_at", table_name="listings")
    op.drop_table("listings")
