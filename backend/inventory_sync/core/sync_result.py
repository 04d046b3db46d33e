"""Sync Result — per-operation outcomes and the caller-facing summary of a pass.

Invariants:
    - updated/added count only SUCCESSFUL operations
    - total is the number of data rows in the store after the pass
    - status FAILED <=> the pass aborted (error is set); PARTIAL <=> completed with at
      least one per-record or per-row failure; SUCCESS otherwise
    - to_response() is JSON-safe (no Enums, no dataclasses)

Design Decisions:
    - Each mutation tracked individually: the backing stores offer no multi-row
      atomicity, so the result is a ledger of independent operations
"""

from dataclasses import dataclass, field

from inventory_sync.core.domain_types import KeyValue, OperationKind, SyncStatus
from inventory_sync.core.errors import FailureCode, InventorySyncError
from inventory_sync.core.upsert_planner import PlannedOperation, RecordFailure


@dataclass(frozen=True)
class OperationOutcome:
    """Result of applying one PlannedOperation to the store."""
    operation: PlannedOperation
    succeeded: bool
    attempts: int = 1
    error: str | None = None

    @property
    def kind(self) -> OperationKind:
        return self.operation.kind

    @property
    def key(self) -> KeyValue:
        return self.operation.key


@dataclass
class MutationReport:
    outcomes: list[OperationOutcome] = field(default_factory=list)

    @property
    def updated(self) -> int:
        return _count(self.outcomes, OperationKind.UPDATE)

    @property
    def added(self) -> int:
        return _count(self.outcomes, OperationKind.INSERT)

    @property
    def failed(self) -> list[OperationOutcome]:
        return [o for o in self.outcomes if not o.succeeded]


def _count(outcomes: list[OperationOutcome], kind: OperationKind) -> int:
    return sum(1 for o in outcomes if o.succeeded and o.kind is kind)


@dataclass
class SyncResult:
    """Caller-facing result of one sync invocation."""
    status: SyncStatus
    updated: int = 0
    added: int = 0
    total: int = 0
    skipped: int = 0
    failures: list[dict] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    message: str = ""
    error: InventorySyncError | None = None

    @property
    def ok(self) -> bool:
        return self.status is not SyncStatus.FAILED

    def to_response(self) -> dict:
        body = {
            "status": self.status.value,
            "updated": self.updated,
            "added": self.added,
            "total": self.total,
            "skipped": self.skipped,
            "failures": self.failures,
            "warnings": self.warnings,
            "message": self.message,
        }
        if self.error is not None:
            body.update(self.error.to_response())
        return body


def record_failure_entry(failure: RecordFailure) -> dict:
    return {
        "code": failure.code.value,
        "batch_index": failure.batch_index,
        "message": failure.message,
    }


def row_failure_entry(outcome: OperationOutcome) -> dict:
    return {
        "code": FailureCode.STORE_WRITE_FAILURE.value,
        "key": outcome.key,
        "operation": outcome.kind.value,
        "position": outcome.operation.position,
        "attempts": outcome.attempts,
        "message": outcome.error or "row write failed",
    }


def summarize_pass(
    report: MutationReport,
    record_failures: list[RecordFailure],
    total: int,
    warnings: list[str] | None = None,
) -> SyncResult:
    """Fold outcomes into a SyncResult. Pure — never raises."""
    failures = [record_failure_entry(f) for f in record_failures]
    failures += [row_failure_entry(o) for o in report.failed]
    status = SyncStatus.PARTIAL if failures else SyncStatus.SUCCESS
    message = (
        f"{report.updated} updated, {report.added} added, {total} total"
    )
    if failures:
        message += f"; {len(failures)} failure(s)"
    return SyncResult(
        status=status,
        updated=report.updated,
        added=report.added,
        total=total,
        skipped=len(record_failures),
        failures=failures,
        warnings=list(warnings or []),
        message=message,
    )


def failed_pass(error: InventorySyncError, total: int = 0) -> SyncResult:
    """Structured result for an aborted invocation."""
    return SyncResult(
        status=SyncStatus.FAILED, total=total, message=error.message, error=error,
    )
