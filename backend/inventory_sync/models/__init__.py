"""ORM Models — SQLAlchemy declarative models backing the SQL table store.

Invariants:
    - All models inherit from Base (db/base.py)
    - StoredTable is the aggregate root; every StoreRow is scoped by table_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from inventory_sync.models.stored_table import StoredTable  # noqa: F401
from inventory_sync.models.store_row import StoreRow  # noqa: F401
