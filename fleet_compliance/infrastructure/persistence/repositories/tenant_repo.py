"""Tenant repository. Lists tenants for multi-tenant sweeps; returns DTOs."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_compliance.application.dtos.tenant import TenantResult
from fleet_compliance.domain.enums import TenantStatus
from fleet_compliance.infrastructure.persistence.models.tenant import Tenant
from fleet_compliance.infrastructure.persistence.repositories.base import storage_errors


def _tenant_to_result(t: Tenant) -> TenantResult:
    """Map ORM Tenant to application TenantResult."""
    return TenantResult(id=t.id, code=t.code, name=t.name, status=t.status)


class TenantRepository:
    """Tenant reads. Tenant is the root entity, so there is no tenant filter."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_active_tenants(
        self, skip: int = 0, limit: int = 100
    ) -> list[TenantResult]:
        """Return active tenants ordered by code."""
        with storage_errors("list tenants"):
            result = await self.db.execute(
                select(Tenant)
                .where(Tenant.status == TenantStatus.ACTIVE.value)
                .order_by(Tenant.code)
                .offset(skip)
                .limit(limit)
            )
        return [_tenant_to_result(t) for t in result.scalars().all()]
