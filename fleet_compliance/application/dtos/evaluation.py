"""DTOs for compliance evaluation results (derived, never persisted as-is)."""

from dataclasses import dataclass, field
from datetime import date, datetime

from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleResult
from fleet_compliance.application.dtos.driver import DriverResult
from fleet_compliance.domain.enums import DocumentStatus


@dataclass(frozen=True)
class DocumentClassification:
    """Classifier output for one expiry date."""

    status: DocumentStatus
    days_until_expiry: int


@dataclass(frozen=True)
class DocumentEvaluation:
    """One document-type slot for a driver. doc_id is None when missing."""

    doc_id: str | None
    doc_type: str
    expires_at: datetime | date | None
    days_until_expiry: int | None
    status: DocumentStatus
    is_required: bool


@dataclass(frozen=True)
class DriverEvaluation:
    """Compliance of one driver against the required rule set."""

    driver_id: str
    compliant: bool
    compliance_score: int
    expired_count: int
    expiring_count: int
    missing_count: int
    documents: tuple[DocumentEvaluation, ...] = ()
    missing_required_docs: tuple[str, ...] = ()

    @property
    def required_documents(self) -> tuple[DocumentEvaluation, ...]:
        return tuple(d for d in self.documents if d.is_required)


@dataclass(frozen=True)
class IssueCount:
    """Number of drivers with a problem on one document type."""

    doc_type: str
    count: int


@dataclass(frozen=True)
class TenantEvaluation:
    """Tenant-wide rollup of driver evaluations."""

    tenant_id: str
    total_drivers: int
    compliant_drivers: int
    non_compliant_drivers: int
    compliance_percentage: int
    expired_count: int
    expiring_count: int
    missing_count: int
    top_issues: tuple[IssueCount, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ComplianceReport:
    """Tenant summary plus every driver's evaluation, from one batch evaluation."""

    summary: TenantEvaluation
    drivers: tuple[DriverEvaluation, ...]
    generated_at: datetime


@dataclass(frozen=True)
class TenantEvaluationBatch:
    """Active drivers of a tenant, the rules used, and each driver's evaluation.

    Produced by one rule read and one batched document read; every
    downstream consumer (summary, alerts, snapshots, report) works from it
    so they all see the same evaluation.
    """

    tenant_id: str
    drivers: tuple[DriverResult, ...]
    rules: tuple[ComplianceRuleResult, ...]
    evaluations: dict[str, DriverEvaluation]
    evaluated_at: datetime | date
