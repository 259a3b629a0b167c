"""Create compliance snapshot use case: append point-in-time history rows."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

from fleet_compliance.application.dtos.evaluation import (
    DriverEvaluation,
    TenantEvaluation,
)
from fleet_compliance.application.dtos.snapshot import (
    ComplianceSnapshotCreate,
    SnapshotCreateResult,
)
from fleet_compliance.core.constants import MAX_ERROR_IDS
from fleet_compliance.domain.exceptions import (
    SnapshotCreationFailedException,
    StorageUnavailableException,
)
from fleet_compliance.shared.telemetry.tracing import add_span_attributes, traced
from fleet_compliance.shared.utils.datetime import to_utc_datetime, utc_now

if TYPE_CHECKING:
    from fleet_compliance.application.interfaces.repositories import (
        IComplianceSnapshotRepository,
    )
    from fleet_compliance.application.use_cases.compliance.evaluate_drivers import (
        EvaluateDriverUseCase,
    )
    from fleet_compliance.application.use_cases.compliance.evaluate_tenant import (
        EvaluateTenantUseCase,
    )

logger = logging.getLogger(__name__)

_driver_details = TypeAdapter(DriverEvaluation)
_tenant_details = TypeAdapter(TenantEvaluation)


def driver_details_json(evaluation: DriverEvaluation) -> dict[str, Any]:
    """JSON-safe dict of a driver evaluation (enums as values, ISO dates)."""
    return _driver_details.dump_python(evaluation, mode="json")


def tenant_details_json(evaluation: TenantEvaluation) -> dict[str, Any]:
    """JSON-safe dict of a tenant evaluation."""
    return _tenant_details.dump_python(evaluation, mode="json")


class CreateComplianceSnapshotUseCase:
    """Records snapshots for one driver, or for all drivers plus the tenant.

    The all-drivers run evaluates once and derives every row (per driver and
    the tenant rollup) from that same batch. Each insert is savepoint
    isolated in the repository; failures are logged and counted and the
    run continues.
    """

    def __init__(
        self,
        evaluate_driver_use_case: "EvaluateDriverUseCase",
        evaluate_tenant_use_case: "EvaluateTenantUseCase",
        snapshot_repo: "IComplianceSnapshotRepository",
    ) -> None:
        self._evaluate_driver = evaluate_driver_use_case
        self._evaluate_tenant = evaluate_tenant_use_case
        self._snapshot_repo = snapshot_repo

    @traced("compliance.create_snapshot")
    async def execute(
        self,
        tenant_id: str,
        driver_id: str | None = None,
        now: date | datetime | None = None,
    ) -> SnapshotCreateResult:
        """Append snapshot rows.

        Args:
            tenant_id: Tenant id.
            driver_id: One driver, or None for all active drivers plus one
                tenant-level row.
            now: Reference instant (defaults to current UTC time).

        Returns:
            SnapshotCreateResult with created and error counts.

        Raises:
            ResourceNotFoundException: driver_id is given but not an active driver.
            ComplianceConfigurationException: Rules are malformed (nothing written).
            SnapshotCreationFailedException: Every attempted insert failed.
            StorageUnavailableException: Storage could not be reached.
        """
        now = now or utc_now()
        computed_at = to_utc_datetime(now)
        rows: list[ComplianceSnapshotCreate] = []

        if driver_id is not None:
            evaluation = await self._evaluate_driver.execute(tenant_id, driver_id, now=now)
            rows.append(_driver_row(tenant_id, evaluation, computed_at))
        else:
            batch = await self._evaluate_tenant.load(tenant_id, now=now)
            for driver in batch.drivers:
                rows.append(
                    _driver_row(tenant_id, batch.evaluations[driver.id], computed_at)
                )
            rows.append(
                _tenant_row(self._evaluate_tenant.summarize(batch), computed_at)
            )

        created = 0
        errors = 0
        error_driver_ids: list[str] = []
        for row in rows:
            try:
                await self._snapshot_repo.create_snapshot(row)
            except StorageUnavailableException:
                raise
            except Exception:
                logger.exception(
                    "Failed to record compliance snapshot for tenant %s driver %s",
                    tenant_id,
                    row.driver_id or "<tenant>",
                )
                errors += 1
                if row.driver_id is not None and len(error_driver_ids) < MAX_ERROR_IDS:
                    error_driver_ids.append(row.driver_id)
            else:
                created += 1

        add_span_attributes(snapshots_created=created, snapshot_errors=errors)
        if errors and created == 0:
            raise SnapshotCreationFailedException(tenant_id, errors)
        logger.info(
            "Compliance snapshots for tenant %s: %d created, %d errors",
            tenant_id,
            created,
            errors,
        )
        return SnapshotCreateResult(
            tenant_id=tenant_id,
            created=created,
            errors=errors,
            error_driver_ids=tuple(error_driver_ids),
        )


def _driver_row(
    tenant_id: str, evaluation: DriverEvaluation, computed_at: datetime
) -> ComplianceSnapshotCreate:
    return ComplianceSnapshotCreate(
        tenant_id=tenant_id,
        driver_id=evaluation.driver_id,
        compliance_score=evaluation.compliance_score,
        compliant=evaluation.compliant,
        expired_count=evaluation.expired_count,
        expiring_count=evaluation.expiring_count,
        missing_count=evaluation.missing_count,
        computed_at=computed_at,
        details_json=driver_details_json(evaluation),
    )


def _tenant_row(
    summary: TenantEvaluation, computed_at: datetime
) -> ComplianceSnapshotCreate:
    return ComplianceSnapshotCreate(
        tenant_id=summary.tenant_id,
        driver_id=None,
        compliance_score=summary.compliance_percentage,
        compliant=summary.non_compliant_drivers == 0,
        expired_count=summary.expired_count,
        expiring_count=summary.expiring_count,
        missing_count=summary.missing_count,
        computed_at=computed_at,
        details_json=tenant_details_json(summary),
    )
