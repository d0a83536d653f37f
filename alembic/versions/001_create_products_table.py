"""Create products table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `products` table backing the catalog endpoints and seeders.
How:   Portable column types only, so the same migration runs on PostgreSQL
       and SQLite.

Rollback: downgrade() drops the table entirely (all data is lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the products table and its name index. See app/models/product.py."""
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name",
            sa.String(255),
            nullable=False,
            comment="Display name of the product",
        ),
        sa.Column(
            "description",
            sa.Text(),
            nullable=True,
            comment="Free-form marketing description",
        ),
        sa.Column(
            "price",
            sa.Numeric(10, 2),
            nullable=False,
            comment="Unit price, two decimal places",
        ),
        sa.Column(
            "image_url",
            sa.String(2048),
            nullable=True,
            comment="Absolute URL of the product image",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_products_name", "products", ["name"])


def downgrade() -> None:
    """Drop the products table. Destructive: all product rows are lost."""
    op.drop_index("idx_products_name", table_name="products")
    op.drop_table("products")
