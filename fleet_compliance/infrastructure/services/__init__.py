"""Infrastructure services: multi-tenant compliance sweeps."""

from fleet_compliance.infrastructure.services.compliance_sweep import (
    ComplianceSweepService,
)

__all__ = ["ComplianceSweepService"]
