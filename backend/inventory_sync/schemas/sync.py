"""Sync Schemas — Pydantic models for the sync endpoint and store read view.

Invariants:
    - SyncRequest.records may be empty: EmptyBatch is reported by the engine, not by
      request validation, so callers always get the SyncResponse shape back
    - Field values: str, number, bool, null, or a list of those (multi-valued)
    - Field names are not validated here: ingestion drops blank names per record,
      so one malformed field never rejects the whole batch
    - SyncResponse mirrors SyncResult.to_response() minus the error envelope

Design Decisions:
    - Literal for status over str Enum: Pydantic handles validation natively
"""

from typing import Literal

from pydantic import BaseModel, Field

FieldValue = str | int | float | bool | None | list[str | int | float | bool | None]


class SyncRequest(BaseModel):
    """Batch of machine snapshots to reconcile into one store."""
    records: list[dict[str, FieldValue]] = Field(default_factory=list)


class SyncFailure(BaseModel):
    code: str
    message: str
    batch_index: int | None = None
    key: str | None = None
    operation: str | None = None
    position: int | None = None
    attempts: int | None = None


class SyncResponse(BaseModel):
    """Per-invocation result."""
    status: Literal["success", "partial", "failed"]
    updated: int = Field(ge=0)
    added: int = Field(ge=0)
    total: int = Field(ge=0)
    skipped: int = Field(0, ge=0)
    failures: list[SyncFailure] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    message: str = ""


class StoreView(BaseModel):
    """Read-only view of a store: header plus data rows in stored order."""
    name: str
    header: list[str]
    rows: list[list[str]]
    total: int = Field(ge=0)
