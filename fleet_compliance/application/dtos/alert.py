"""DTOs for compliance alerts (candidates, persisted rows, run results)."""

from dataclasses import dataclass
from datetime import date, datetime

from fleet_compliance.domain.enums import AlertType, DocumentStatus


@dataclass(frozen=True)
class AlertCandidate:
    """A required document that currently warrants an alert."""

    driver_id: str
    doc_id: str
    doc_type: str
    expires_at: datetime | date
    days_until_expiry: int
    alert_type: AlertType
    alert_window_days: int
    dedupe_key: str


@dataclass(frozen=True)
class ComplianceAlertCreate:
    """Input for appending one alert row."""

    tenant_id: str
    driver_id: str
    doc_id: str
    alert_type: AlertType
    alert_window_days: int
    channel: str
    dedupe_key: str
    sent_at: datetime


@dataclass(frozen=True)
class ComplianceAlertResult:
    """Persisted alert (immutable)."""

    id: str
    tenant_id: str
    driver_id: str
    doc_id: str
    alert_type: AlertType
    alert_window_days: int
    sent_at: datetime
    channel: str
    dedupe_key: str


@dataclass(frozen=True)
class AlertReconcileResult:
    """Outcome of one reconcile run for a tenant."""

    tenant_id: str
    sent: int
    skipped: int
    errors: int
    error_dedupe_keys: tuple[str, ...] = ()

    @property
    def candidates(self) -> int:
        return self.sent + self.skipped + self.errors


@dataclass(frozen=True)
class AlertCountResult:
    """Current alert candidates by type (badge counts)."""

    total: int
    expired: int
    expiring: int


@dataclass(frozen=True)
class ExpiringDocumentItem:
    """Required document that is expired or expiring, with its driver."""

    doc_id: str
    driver_id: str
    driver_name: str
    driver_email: str | None
    doc_type: str
    expires_at: datetime | date
    days_until_expiry: int
    status: DocumentStatus


@dataclass(frozen=True)
class ExpiringDocumentsResult:
    """Filtered listing; counts are over the unfiltered set."""

    items: tuple[ExpiringDocumentItem, ...]
    total: int
    expired: int
    expiring: int
