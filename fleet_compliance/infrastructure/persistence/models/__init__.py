"""Persistence models: ORM entities and mixins."""

from fleet_compliance.infrastructure.persistence.models.audit_log import AuditLog
from fleet_compliance.infrastructure.persistence.models.compliance_alert import (
    ComplianceAlert,
)
from fleet_compliance.infrastructure.persistence.models.compliance_rule import (
    ComplianceRule,
)
from fleet_compliance.infrastructure.persistence.models.compliance_snapshot import (
    ComplianceSnapshot,
)
from fleet_compliance.infrastructure.persistence.models.driver import (
    Driver,
    DriverComplianceDocument,
)
from fleet_compliance.infrastructure.persistence.models.mixins import (
    CuidMixin,
    MultiTenantModel,
    SoftDeleteMixin,
    TenantMixin,
    TimestampMixin,
)
from fleet_compliance.infrastructure.persistence.models.tenant import Tenant

__all__ = [
    "AuditLog",
    "ComplianceAlert",
    "ComplianceRule",
    "ComplianceSnapshot",
    "CuidMixin",
    "Driver",
    "DriverComplianceDocument",
    "MultiTenantModel",
    "SoftDeleteMixin",
    "Tenant",
    "TenantMixin",
    "TimestampMixin",
]
