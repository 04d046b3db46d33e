"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - key_field is a fixed, configured constant shared by every writer of a store

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - row_write_delay_ms defaults to 0: pacing only matters for rate-limited stores
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from inventory_sync.core.domain_types import HeaderStyle, StoreBackend


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://inventory:inventory@db:5432/inventory"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    # ADR: local SQLite runs only; production schema is owned by alembic
    database_create_schema: bool = False

    # Store
    store_backend: StoreBackend = StoreBackend.SQL
    key_field: str = Field("ComputerName", min_length=1)

    # Header formatting (applied once, on first write)
    header_bold: bool = True
    header_background_color: str = "#1F4E78"
    header_font_color: str = "#FFFFFF"

    # Row writes
    row_write_delay_ms: int = Field(0, ge=0)
    row_write_max_retries: int = Field(2, ge=0)
    row_write_base_delay_ms: int = Field(200, ge=0)
    row_write_max_delay_ms: int = Field(5_000, ge=0)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def header_style(self) -> HeaderStyle:
        return HeaderStyle(
            bold=self.header_bold,
            background_color=self.header_background_color,
            font_color=self.header_font_color,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
