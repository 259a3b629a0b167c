"""Initialize compliance use case: seed rules, reconcile alerts, snapshot."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING

from fleet_compliance.application.dtos.initialize import InitializeComplianceResult
from fleet_compliance.domain.exceptions import (
    ComplianceEngineException,
    StorageUnavailableException,
)
from fleet_compliance.shared.telemetry.tracing import traced
from fleet_compliance.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from fleet_compliance.application.use_cases.compliance.create_snapshot import (
        CreateComplianceSnapshotUseCase,
    )
    from fleet_compliance.application.use_cases.compliance.manage_rules import (
        ComplianceRuleService,
    )
    from fleet_compliance.application.use_cases.compliance.reconcile_alerts import (
        ReconcileAlertsUseCase,
    )

logger = logging.getLogger(__name__)


class InitializeComplianceUseCase:
    """Brings a tenant's compliance data up to date in three steps.

    Steps run in order (rules, alerts, snapshots). A step failing with an
    engine error is recorded by error code and later steps still run.
    Storage outages stop the run, since later steps would fail the same way.
    """

    def __init__(
        self,
        rule_service: "ComplianceRuleService",
        reconcile_alerts_use_case: "ReconcileAlertsUseCase",
        create_snapshot_use_case: "CreateComplianceSnapshotUseCase",
    ) -> None:
        self._rule_service = rule_service
        self._reconcile_alerts = reconcile_alerts_use_case
        self._create_snapshot = create_snapshot_use_case

    @traced("compliance.initialize")
    async def execute(
        self,
        tenant_id: str,
        now: date | datetime | None = None,
        user_id: str | None = None,
    ) -> InitializeComplianceResult:
        now = now or utc_now()
        errors: dict[str, str] = {}
        rules = None
        alerts = None
        snapshots = None

        try:
            rules = tuple(await self._rule_service.seed_default_rules(tenant_id))
        except StorageUnavailableException:
            raise
        except ComplianceEngineException as e:
            logger.warning("Seeding rules failed for tenant %s: %s", tenant_id, e.message)
            errors["rules"] = e.error_code

        try:
            alerts = await self._reconcile_alerts.execute(
                tenant_id, now=now, user_id=user_id
            )
        except StorageUnavailableException:
            raise
        except ComplianceEngineException as e:
            logger.warning(
                "Reconciling alerts failed for tenant %s: %s", tenant_id, e.message
            )
            errors["alerts"] = e.error_code

        try:
            snapshots = await self._create_snapshot.execute(tenant_id, now=now)
        except StorageUnavailableException:
            raise
        except ComplianceEngineException as e:
            logger.warning(
                "Creating snapshots failed for tenant %s: %s", tenant_id, e.message
            )
            errors["snapshots"] = e.error_code

        return InitializeComplianceResult(
            tenant_id=tenant_id,
            rules=rules,
            alerts=alerts,
            snapshots=snapshots,
            errors=errors,
        )
