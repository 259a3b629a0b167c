"""DTOs for compliance snapshots (append-only history)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ComplianceSnapshotCreate:
    """Input for appending one snapshot row. driver_id None = tenant rollup."""

    tenant_id: str
    driver_id: str | None
    compliance_score: int
    compliant: bool
    expired_count: int
    expiring_count: int
    missing_count: int
    computed_at: datetime
    details_json: dict[str, Any]


@dataclass(frozen=True)
class ComplianceSnapshotResult:
    """Persisted snapshot (immutable)."""

    id: str
    tenant_id: str
    driver_id: str | None
    compliance_score: int
    compliant: bool
    expired_count: int
    expiring_count: int
    missing_count: int
    computed_at: datetime
    details_json: dict[str, Any]


@dataclass(frozen=True)
class SnapshotCreateResult:
    """Outcome of one snapshot run (one driver, or all drivers + tenant row)."""

    tenant_id: str
    created: int
    errors: int
    error_driver_ids: tuple[str, ...] = ()
