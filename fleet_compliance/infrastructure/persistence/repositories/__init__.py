"""Repositories: SQLAlchemy implementations of the application ports."""

from fleet_compliance.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from fleet_compliance.infrastructure.persistence.repositories.base import (
    BaseRepository,
    storage_errors,
)
from fleet_compliance.infrastructure.persistence.repositories.compliance_alert_repo import (
    ComplianceAlertRepository,
)
from fleet_compliance.infrastructure.persistence.repositories.compliance_rule_repo import (
    ComplianceRuleRepository,
)
from fleet_compliance.infrastructure.persistence.repositories.compliance_snapshot_repo import (
    ComplianceSnapshotRepository,
)
from fleet_compliance.infrastructure.persistence.repositories.driver_document_repo import (
    DriverDocumentRepository,
)
from fleet_compliance.infrastructure.persistence.repositories.driver_repo import (
    DriverRepository,
)
from fleet_compliance.infrastructure.persistence.repositories.tenant_repo import (
    TenantRepository,
)

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "ComplianceAlertRepository",
    "ComplianceRuleRepository",
    "ComplianceSnapshotRepository",
    "DriverDocumentRepository",
    "DriverRepository",
    "TenantRepository",
    "storage_errors",
]
