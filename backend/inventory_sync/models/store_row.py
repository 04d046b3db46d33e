"""StoreRow ORM — one positional row of a StoredTable.

Invariants:
    - (table_id, position) is unique
    - position 0 is the header row; data rows occupy 1..N with no gaps
    - cells is an ordered list of strings aligned to the header

Design Decisions:
    - JSON column for cells: the header only grows, so a fixed column set per store
      is not known ahead of time
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from inventory_sync.db.base import Base

HEADER_POSITION = 0


class StoreRow(Base):
    """One row of a store (header or data)."""
    __tablename__ = "store_rows"
    __table_args__ = (
        UniqueConstraint("table_id", "position", name="uq_store_rows_table_position"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    table_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("stored_tables.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    cells: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
