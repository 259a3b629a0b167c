"""Shared entry point for the compliance sweep scripts."""

import sys
from collections.abc import Awaitable, Callable

from fleet_compliance.application.dtos.sweep import SweepResult
from fleet_compliance.domain.exceptions import ComplianceEngineException
from fleet_compliance.infrastructure.persistence.database import dispose_engine
from fleet_compliance.infrastructure.services import ComplianceSweepService
from fleet_compliance.shared.telemetry import setup_logging


def print_sweep(result: SweepResult) -> None:
    for outcome in result.outcomes:
        if outcome.status == "succeeded":
            print(f"Tenant {outcome.tenant_code}: {outcome.result}")
        else:
            print(f"Tenant {outcome.tenant_code}: {outcome.status} ({outcome.error})")
    print(
        f"Done. {result.succeeded} succeeded, {result.failed} failed, "
        f"{result.timed_out} timed out"
    )


async def run_sweep(
    job: Callable[[ComplianceSweepService, str | None], Awaitable[SweepResult]],
) -> int:
    """Run one sweep for all active tenants (or argv[1] as tenant id/code).

    Returns the process exit code: 0 when every tenant succeeded.
    """
    setup_logging()
    tenant_filter = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        service = ComplianceSweepService()
        result = await job(service, tenant_filter)
    except ComplianceEngineException as e:
        print(f"{e.error_code}: {e.message}", file=sys.stderr)
        return 1
    finally:
        await dispose_engine()
    print_sweep(result)
    return 0 if result.failed == 0 and result.timed_out == 0 else 1
