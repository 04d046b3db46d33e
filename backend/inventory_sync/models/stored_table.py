"""StoredTable ORM — one named tabular store (the equivalent of a worksheet).

Invariants:
    - name is unique: one store per name
    - header_style is set on first header write and never changed afterwards

Design Decisions:
    - Header kept as row 0 in store_rows, not on this table: rows and header share
      one positional layout, exactly like a spreadsheet
    - Rows are deleted by the store_rows.table_id ON DELETE CASCADE foreign key;
      no ORM relationship, rows are only ever queried by (table_id, position)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from inventory_sync.db.base import Base


class StoredTable(Base):
    """Named store — owns its header row and data rows."""
    __tablename__ = "stored_tables"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    header_style: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
