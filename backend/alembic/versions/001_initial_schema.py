"""Initial schema — stored_tables, store_rows.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "stored_tables",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("header_style", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "store_rows",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "table_id", UUID(as_uuid=True),
            sa.ForeignKey("stored_tables.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("cells", sa.JSON, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("table_id", "position", name="uq_store_rows_table_position"),
    )
    op.create_index("ix_store_rows_table_id", "store_rows", ["table_id"])


def downgrade() -> None:
    op.drop_index("ix_store_rows_table_id", table_name="store_rows")
    op.drop_table("store_rows")
    op.drop_table("stored_tables")
