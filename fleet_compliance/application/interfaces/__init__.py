"""Application interfaces (ports) implemented by infrastructure."""

from fleet_compliance.application.interfaces.repositories import (
    IAuditLogRepository,
    IComplianceAlertRepository,
    IComplianceRuleRepository,
    IComplianceSnapshotRepository,
    IDriverDocumentRepository,
    IDriverRepository,
    ITenantRepository,
)

__all__ = [
    "IAuditLogRepository",
    "IComplianceAlertRepository",
    "IComplianceRuleRepository",
    "IComplianceSnapshotRepository",
    "IDriverDocumentRepository",
    "IDriverRepository",
    "ITenantRepository",
]
