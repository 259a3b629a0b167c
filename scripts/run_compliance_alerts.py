"""Run compliance alerts: record new expiring/expired document alerts.

Usage:
    python -m scripts.run_compliance_alerts [tenant_id_or_code]
If the tenant is omitted, processes all active tenants. Safe to run
repeatedly (alerts are deduplicated). Requires DATABASE_URL.
"""

import asyncio
import sys

from scripts._sweep_cli import run_sweep


async def main() -> int:
    """Reconcile alerts for each tenant."""
    return await run_sweep(
        lambda service, tenant: service.run_alerts(tenant_filter=tenant)
    )


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
