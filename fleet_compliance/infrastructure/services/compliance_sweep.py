"""Multi-tenant compliance sweeps (cron jobs: alerts, snapshots, rule seeding).

Tenants run concurrently up to compliance_sweep_concurrency, each in its own
session and transaction with a wall-clock budget. One tenant failing or
timing out never cancels or rolls back another; every tenant is reported.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import date, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fleet_compliance.application.dtos.sweep import SweepResult, TenantJobOutcome
from fleet_compliance.application.dtos.tenant import TenantResult
from fleet_compliance.core.config import Settings, get_settings
from fleet_compliance.domain.exceptions import (
    ComplianceEngineException,
    EvaluationTimeoutException,
    ResourceNotFoundException,
)
from fleet_compliance.infrastructure.composition import (
    ComplianceUseCases,
    build_compliance_use_cases,
)
from fleet_compliance.infrastructure.persistence.database import (
    get_session_factory,
    system_session,
    tenant_transaction,
)
from fleet_compliance.infrastructure.persistence.repositories import TenantRepository
from fleet_compliance.shared.utils.datetime import utc_now
from fleet_compliance.shared.utils.timeouts import run_with_timeout

logger = logging.getLogger(__name__)

TENANT_PAGE_SIZE = 500

TenantWork = Callable[[ComplianceUseCases, TenantResult], Awaitable[Any]]


class ComplianceSweepService:
    """Runs one compliance job across all active tenants."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        settings: Settings | None = None,
        use_cases_factory: Callable[[AsyncSession], ComplianceUseCases] | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._session_factory = session_factory or get_session_factory()
        self._use_cases_factory = use_cases_factory or (
            lambda session: build_compliance_use_cases(session, self._settings)
        )
        self._timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else self._settings.compliance_job_timeout_seconds
        )

    async def list_tenants(self, tenant_filter: str | None = None) -> list[TenantResult]:
        """Active tenants, optionally narrowed to one id or code.

        Raises:
            ResourceNotFoundException: tenant_filter matches no active tenant.
        """
        tenants: list[TenantResult] = []
        async with system_session(self._session_factory) as session:
            repo = TenantRepository(session)
            skip = 0
            while True:
                page = await repo.get_active_tenants(skip=skip, limit=TENANT_PAGE_SIZE)
                tenants.extend(page)
                if len(page) < TENANT_PAGE_SIZE:
                    break
                skip += len(page)
        if tenant_filter:
            tenants = [
                t for t in tenants if tenant_filter in (t.id, t.code)
            ]
            if not tenants:
                raise ResourceNotFoundException("tenant", tenant_filter)
        return tenants

    async def run_alerts(
        self,
        now: date | datetime | None = None,
        tenant_filter: str | None = None,
    ) -> SweepResult:
        """Reconcile alerts for every active tenant."""
        now = now or utc_now()
        tenants = await self.list_tenants(tenant_filter)
        return await self.run(
            "compliance_alerts",
            tenants,
            lambda uc, tenant: uc.reconcile_alerts.execute(tenant.id, now=now),
        )

    async def run_snapshots(
        self,
        now: date | datetime | None = None,
        tenant_filter: str | None = None,
    ) -> SweepResult:
        """Snapshot all drivers (plus the tenant row) for every active tenant."""
        now = now or utc_now()
        tenants = await self.list_tenants(tenant_filter)
        return await self.run(
            "compliance_snapshots",
            tenants,
            lambda uc, tenant: uc.create_snapshot.execute(tenant.id, now=now),
        )

    async def run_seed_rules(self, tenant_filter: str | None = None) -> SweepResult:
        """Upsert the default rules for every active tenant."""
        tenants = await self.list_tenants(tenant_filter)
        return await self.run(
            "compliance_seed_rules",
            tenants,
            lambda uc, tenant: uc.rules.seed_default_rules(tenant.id),
        )

    async def run(
        self, job: str, tenants: Sequence[TenantResult], work: TenantWork
    ) -> SweepResult:
        """Run work once per tenant; returns one outcome per tenant, in input order."""
        semaphore = asyncio.Semaphore(self._settings.compliance_sweep_concurrency)
        results = await asyncio.gather(
            *(self._run_tenant(job, tenant, work, semaphore) for tenant in tenants),
            return_exceptions=True,
        )
        outcomes: list[TenantJobOutcome] = []
        for tenant, result in zip(tenants, results):
            if isinstance(result, BaseException):
                logger.error(
                    "%s for tenant %s ended abnormally: %r", job, tenant.code, result
                )
                outcomes.append(
                    TenantJobOutcome(
                        tenant_id=tenant.id,
                        tenant_code=tenant.code,
                        status="failed",
                        error=type(result).__name__,
                    )
                )
            else:
                outcomes.append(result)
        sweep = SweepResult(job=job, outcomes=tuple(outcomes))
        logger.info(
            "%s finished: %d tenant(s), %d succeeded, %d failed, %d timed out",
            job,
            len(outcomes),
            sweep.succeeded,
            sweep.failed,
            sweep.timed_out,
        )
        return sweep

    async def _run_tenant(
        self,
        job: str,
        tenant: TenantResult,
        work: TenantWork,
        semaphore: asyncio.Semaphore,
    ) -> TenantJobOutcome:
        async with semaphore:
            try:
                result = await run_with_timeout(
                    self._in_transaction(tenant, work),
                    self._timeout_seconds,
                    f"{job} for tenant {tenant.code}",
                )
            except EvaluationTimeoutException as e:
                return TenantJobOutcome(
                    tenant_id=tenant.id,
                    tenant_code=tenant.code,
                    status="timed_out",
                    error=e.error_code,
                )
            except ComplianceEngineException as e:
                logger.warning(
                    "%s failed for tenant %s: %s (%s)",
                    job,
                    tenant.code,
                    e.message,
                    e.error_code,
                )
                return TenantJobOutcome(
                    tenant_id=tenant.id,
                    tenant_code=tenant.code,
                    status="failed",
                    error=e.error_code,
                )
            except Exception as e:
                logger.exception("%s failed for tenant %s", job, tenant.code)
                return TenantJobOutcome(
                    tenant_id=tenant.id,
                    tenant_code=tenant.code,
                    status="failed",
                    error=type(e).__name__,
                )
        return TenantJobOutcome(
            tenant_id=tenant.id,
            tenant_code=tenant.code,
            status="succeeded",
            result=result,
        )

    async def _in_transaction(self, tenant: TenantResult, work: TenantWork) -> Any:
        async with tenant_transaction(tenant.id, self._session_factory) as session:
            return await work(self._use_cases_factory(session), tenant)
