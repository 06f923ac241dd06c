"""Initial schema — plants, plant_categories, search indexes.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

Trigram GIN indexes back the case-insensitive substring search on name,
description and category name (PostgreSQL only; other dialects scan).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_IMAGE_URL = (
    "https://images.pexels.com/photos/1084199/pexels-photo-1084199.jpeg"
    "?auto=compress&cs=tinysrgb&w=400"
)

# (index_name, table, column)
_TRIGRAM_INDEXES = [
    ("ix_plants_name_trgm", "plants", "name"),
    ("ix_plants_description_trgm", "plants", "description"),
    ("ix_plant_categories_name_trgm", "plant_categories", "name"),
]


def upgrade() -> None:
    op.create_table(
        "plants",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("image", sa.Text, nullable=False, server_default=DEFAULT_IMAGE_URL),
        sa.Column("light", sa.String(10), nullable=False, server_default="Medium"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("quantity >= 0", name="ck_plants_quantity_non_negative"),
        sa.CheckConstraint("price >= 0", name="ck_plants_price_non_negative"),
    )
    op.create_index("ix_plants_created_at", "plants", ["created_at"])

    op.create_table(
        "plant_categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "plant_id", UUID(as_uuid=True),
            sa.ForeignKey("plants.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.UniqueConstraint("plant_id", "position", name="uq_plant_categories_position"),
    )
    op.create_index("ix_plant_categories_name", "plant_categories", ["name"])

    if op.get_bind().dialect.name == "postgresql":
        op.execute("CREATE EXTENSION IF NOT EXISTS pg_trgm")
        for index_name, table, column in _TRIGRAM_INDEXES:
            op.create_index(
                index_name, table, [column],
                postgresql_using="gin",
                postgresql_ops={column: "gin_trgm_ops"},
            )


def downgrade() -> None:
    if op.get_bind().dialect.name == "postgresql":
        for index_name, table, _column in reversed(_TRIGRAM_INDEXES):
            op.drop_index(index_name, table_name=table)
    op.drop_index("ix_plant_categories_name", table_name="plant_categories")
    op.drop_table("plant_categories")
    op.drop_index("ix_plants_created_at", table_name="plants")
    op.drop_table("plants")
