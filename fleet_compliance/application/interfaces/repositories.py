"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Every method takes tenant_id explicitly; there is no ambient tenant.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fleet_compliance.application.dtos.alert import (
        ComplianceAlertCreate,
        ComplianceAlertResult,
    )
    from fleet_compliance.application.dtos.audit_log import (
        AuditLogEntryCreate,
        AuditLogResult,
    )
    from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleResult
    from fleet_compliance.application.dtos.driver import (
        DriverDocumentResult,
        DriverResult,
    )
    from fleet_compliance.application.dtos.snapshot import (
        ComplianceSnapshotCreate,
        ComplianceSnapshotResult,
    )
    from fleet_compliance.application.dtos.tenant import TenantResult


# Compliance rule repository interface
class IComplianceRuleRepository(Protocol):
    """Protocol for compliance rule repository (DIP)."""

    async def list_by_role(
        self, tenant_id: str, role: str
    ) -> list[ComplianceRuleResult]:
        """Return configured rules for role in tenant, ordered by doc_type."""

    async def get_by_doc_type(
        self, tenant_id: str, role: str, doc_type: str
    ) -> ComplianceRuleResult | None:
        """Return the rule for (role, doc_type) in tenant (case-insensitive doc_type)."""

    async def create_rule(
        self,
        tenant_id: str,
        role: str,
        doc_type: str,
        required: bool,
        grace_days: int,
        alert_windows: Sequence[int],
    ) -> ComplianceRuleResult:
        """Create a rule; return created record."""

    async def update_rule(
        self,
        tenant_id: str,
        rule_id: str,
        required: bool,
        grace_days: int,
        alert_windows: Sequence[int],
    ) -> ComplianceRuleResult | None:
        """Update a rule; return None if not found in tenant."""

    async def delete_rule(self, tenant_id: str, rule_id: str) -> bool:
        """Delete a rule; return True if deleted, False if not found in tenant."""


# Driver repository interface
class IDriverRepository(Protocol):
    """Protocol for driver repository (DIP). Soft-deleted drivers are never returned."""

    async def get_active_by_id(
        self, tenant_id: str, driver_id: str
    ) -> DriverResult | None:
        """Return active driver by ID in tenant."""

    async def list_active(
        self,
        tenant_id: str,
        skip: int = 0,
        limit: int = 500,
        search: str | None = None,
    ) -> list[DriverResult]:
        """Return active drivers for tenant ordered by id (optional name/email search)."""


# Driver document repository interface
class IDriverDocumentRepository(Protocol):
    """Protocol for driver compliance document repository (DIP)."""

    async def list_for_drivers(
        self, tenant_id: str, driver_ids: Sequence[str]
    ) -> list[DriverDocumentResult]:
        """Return non-deleted documents for all given drivers in one batched read."""


# Compliance alert repository interface
class IComplianceAlertRepository(Protocol):
    """Protocol for compliance alert repository (DIP). Append-only."""

    async def get_existing_dedupe_keys(
        self, tenant_id: str, dedupe_keys: Iterable[str]
    ) -> set[str]:
        """Return the subset of dedupe_keys already recorded for tenant."""

    async def create_alert(self, data: ComplianceAlertCreate) -> ComplianceAlertResult:
        """Append one alert row (savepoint-isolated); return created record."""


# Compliance snapshot repository interface
class IComplianceSnapshotRepository(Protocol):
    """Protocol for compliance snapshot repository (DIP). Append-only."""

    async def create_snapshot(
        self, data: ComplianceSnapshotCreate
    ) -> ComplianceSnapshotResult:
        """Append one snapshot row (savepoint-isolated); return created record."""

    async def list_history(
        self,
        tenant_id: str,
        driver_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ComplianceSnapshotResult]:
        """Return snapshots newest first; driver_id None = tenant-level rows."""


# Audit log repository interface
class IAuditLogRepository(Protocol):
    """Protocol for audit log repository (DIP). Append-only."""

    async def create_entry(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit log entry; return created record."""


# Tenant repository interface
class ITenantRepository(Protocol):
    """Protocol for tenant repository (DIP)."""

    async def get_active_tenants(
        self, skip: int = 0, limit: int = 100
    ) -> list[TenantResult]:
        """Return active tenants ordered by code."""
