"""Tenant repository integration tests. Require Postgres; session is rolled back after each test."""

import pytest

from fleet_compliance.domain.enums import TenantStatus
from fleet_compliance.infrastructure.persistence.models import Tenant
from fleet_compliance.infrastructure.persistence.repositories import TenantRepository


@pytest.mark.requires_db
async def test_get_active_tenants_skips_inactive(db_session) -> None:
    """Only active tenants are returned, ordered by code."""
    db_session.add_all(
        [
            Tenant(code="zz-repo-active", name="Active", status=TenantStatus.ACTIVE.value),
            Tenant(code="zz-repo-suspended", name="Suspended", status=TenantStatus.SUSPENDED.value),
        ]
    )
    await db_session.flush()

    repo = TenantRepository(db_session)
    codes = [t.code for t in await repo.get_active_tenants(limit=10_000)]
    assert "zz-repo-active" in codes
    assert "zz-repo-suspended" not in codes
    assert codes == sorted(codes)


@pytest.mark.requires_db
async def test_get_active_tenants_pages(db_session) -> None:
    repo = TenantRepository(db_session)
    everything = await repo.get_active_tenants(limit=10_000)
    first = await repo.get_active_tenants(skip=0, limit=1)
    assert first == everything[:1]
