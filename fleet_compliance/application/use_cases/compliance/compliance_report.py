"""Build compliance report use case: summary plus every driver's evaluation."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from fleet_compliance.application.dtos.evaluation import ComplianceReport
from fleet_compliance.shared.telemetry.tracing import traced
from fleet_compliance.shared.utils.datetime import to_utc_datetime, utc_now

if TYPE_CHECKING:
    from fleet_compliance.application.use_cases.compliance.evaluate_tenant import (
        EvaluateTenantUseCase,
    )


class BuildComplianceReportUseCase:
    """Tenant report from a single batch evaluation (summary and rows agree)."""

    def __init__(self, evaluate_tenant_use_case: "EvaluateTenantUseCase") -> None:
        self._evaluate_tenant = evaluate_tenant_use_case

    @traced("compliance.build_report")
    async def execute(
        self,
        tenant_id: str,
        now: date | datetime | None = None,
    ) -> ComplianceReport:
        now = now or utc_now()
        batch = await self._evaluate_tenant.load(tenant_id, now=now)
        return ComplianceReport(
            summary=self._evaluate_tenant.summarize(batch),
            drivers=tuple(
                batch.evaluations[driver_id] for driver_id in sorted(batch.evaluations)
            ),
            generated_at=to_utc_datetime(now),
        )
