"""DTO for the one-shot compliance initialization of a tenant."""

from dataclasses import dataclass, field

from fleet_compliance.application.dtos.alert import AlertReconcileResult
from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleResult
from fleet_compliance.application.dtos.snapshot import SnapshotCreateResult


@dataclass(frozen=True)
class InitializeComplianceResult:
    """Per-step outcome; a failed step has no result and an entry in errors."""

    tenant_id: str
    rules: tuple[ComplianceRuleResult, ...] | None = None
    alerts: AlertReconcileResult | None = None
    snapshots: SnapshotCreateResult | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.errors
