"""DTOs for compliance rules (required document types per role)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ComplianceRuleResult:
    """One rule for (tenant, role, doc_type). alert_windows is largest first."""

    id: str
    tenant_id: str
    role: str
    doc_type: str
    required: bool
    grace_days: int
    alert_windows: tuple[int, ...]
    is_default: bool = False


@dataclass(frozen=True)
class ComplianceRuleUpsert:
    """Input for creating or updating a rule (matched on tenant, role, doc_type)."""

    doc_type: str
    role: str | None = None
    required: bool = True
    grace_days: int = 0
    alert_windows: tuple[int, ...] | None = None  # None = default windows
