"""Evaluate tenant use case: every active driver, rolled up."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING

from fleet_compliance.application.dtos.driver import DriverResult
from fleet_compliance.application.dtos.evaluation import (
    TenantEvaluation,
    TenantEvaluationBatch,
)
from fleet_compliance.application.services.tenant_aggregator import aggregate_tenant
from fleet_compliance.core.constants import DRIVER_PAGE_SIZE, TOP_ISSUES_LIMIT
from fleet_compliance.shared.telemetry.tracing import add_span_attributes, traced
from fleet_compliance.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from fleet_compliance.application.interfaces.repositories import (
        IDriverRepository,
    )
    from fleet_compliance.application.use_cases.compliance.evaluate_drivers import (
        EvaluateDriversBatchUseCase,
    )

logger = logging.getLogger(__name__)


async def list_all_active_drivers(
    driver_repo: "IDriverRepository",
    tenant_id: str,
    page_size: int = DRIVER_PAGE_SIZE,
    search: str | None = None,
) -> list[DriverResult]:
    """Page through list_active until a short page; returns every active driver."""
    drivers: list[DriverResult] = []
    skip = 0
    while True:
        page = await driver_repo.list_active(
            tenant_id, skip=skip, limit=page_size, search=search
        )
        drivers.extend(page)
        if len(page) < page_size:
            return drivers
        skip += len(page)


class EvaluateTenantUseCase:
    """Evaluates all active drivers of a tenant in one batch and aggregates."""

    def __init__(
        self,
        driver_repo: "IDriverRepository",
        batch_use_case: "EvaluateDriversBatchUseCase",
        top_issues_limit: int = TOP_ISSUES_LIMIT,
        page_size: int = DRIVER_PAGE_SIZE,
    ) -> None:
        self._driver_repo = driver_repo
        self._batch_use_case = batch_use_case
        self._top_issues_limit = top_issues_limit
        self._page_size = page_size

    @traced("compliance.evaluate_tenant")
    async def execute(
        self,
        tenant_id: str,
        now: date | datetime | None = None,
    ) -> TenantEvaluation:
        """Return the tenant summary (percentage 0 when there are no drivers).

        Raises:
            ComplianceConfigurationException: Rules are malformed or absent.
        """
        batch = await self.load(tenant_id, now=now)
        return self.summarize(batch)

    async def load(
        self,
        tenant_id: str,
        now: date | datetime | None = None,
        search: str | None = None,
    ) -> TenantEvaluationBatch:
        """Load active drivers and evaluate them together against one rule set."""
        now = now or utc_now()
        drivers = await list_all_active_drivers(
            self._driver_repo, tenant_id, self._page_size, search=search
        )
        rules, evaluations = await self._batch_use_case.evaluate_with_rules(
            tenant_id, [d.id for d in drivers], now=now
        )
        add_span_attributes(driver_count=len(drivers))
        logger.debug(
            "Evaluated %d driver(s) for tenant %s against %d rule(s)",
            len(drivers),
            tenant_id,
            len(rules),
        )
        return TenantEvaluationBatch(
            tenant_id=tenant_id,
            drivers=tuple(drivers),
            rules=tuple(rules),
            evaluations=evaluations,
            evaluated_at=now,
        )

    def summarize(self, batch: TenantEvaluationBatch) -> TenantEvaluation:
        return aggregate_tenant(
            batch.tenant_id, batch.evaluations, self._top_issues_limit
        )
