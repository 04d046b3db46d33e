"""Root conftest — shared test configuration."""

import os

# Never point tests at a real database; no retry sleeps in row-write tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STORE_BACKEND", "sql")
os.environ.setdefault("ROW_WRITE_BASE_DELAY_MS", "0")
os.environ.setdefault("LOG_FORMAT", "text")
