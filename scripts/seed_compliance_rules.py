"""Seed default compliance rules (COMPLIANCE_DEFAULT_* settings) per tenant.

Usage:
    python -m scripts.seed_compliance_rules [tenant_id_or_code]
If the tenant is omitted, seeds all active tenants. Existing rules for the
default document types are updated to the defaults. Requires DATABASE_URL.
"""

import asyncio
import sys

from scripts._sweep_cli import run_sweep


async def main() -> int:
    """Upsert default rules for each tenant."""
    return await run_sweep(
        lambda service, tenant: service.run_seed_rules(tenant_filter=tenant)
    )


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
