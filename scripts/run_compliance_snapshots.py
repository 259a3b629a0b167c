"""Run compliance snapshots: append one row per active driver plus a tenant row.

Usage:
    python -m scripts.run_compliance_snapshots [tenant_id_or_code]
If the tenant is omitted, processes all active tenants. Intended for a
daily schedule. Requires DATABASE_URL.
"""

import asyncio
import sys

from scripts._sweep_cli import run_sweep


async def main() -> int:
    """Snapshot compliance for each tenant."""
    return await run_sweep(
        lambda service, tenant: service.run_snapshots(tenant_filter=tenant)
    )


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
