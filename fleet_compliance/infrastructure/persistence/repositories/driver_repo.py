"""Driver repository. Active (non-deleted) drivers only; returns application DTOs."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_compliance.application.dtos.driver import DriverResult
from fleet_compliance.core.constants import DRIVER_PAGE_SIZE
from fleet_compliance.infrastructure.persistence.models.driver import Driver
from fleet_compliance.infrastructure.persistence.repositories.base import (
    BaseRepository,
    storage_errors,
)


def _to_result(d: Driver) -> DriverResult:
    """Map ORM to DTO."""
    return DriverResult(
        id=d.id,
        tenant_id=d.tenant_id,
        first_name=d.first_name,
        last_name=d.last_name,
        email=d.email,
        license_number=d.license_number,
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DriverRepository(BaseRepository[Driver]):
    """Driver reads for evaluation. Soft-deleted drivers are never returned."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Driver)

    async def get_active_by_id(
        self, tenant_id: str, driver_id: str
    ) -> DriverResult | None:
        with storage_errors("get driver"):
            result = await self.db.execute(
                select(Driver).where(
                    Driver.id == driver_id,
                    Driver.tenant_id == tenant_id,
                    Driver.deleted_at.is_(None),
                )
            )
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def list_active(
        self,
        tenant_id: str,
        skip: int = 0,
        limit: int = DRIVER_PAGE_SIZE,
        search: str | None = None,
    ) -> list[DriverResult]:
        """Active drivers ordered by id; search matches name or email (ILIKE)."""
        stmt = select(Driver).where(
            Driver.tenant_id == tenant_id,
            Driver.deleted_at.is_(None),
        )
        if search:
            pattern = f"%{_escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    Driver.first_name.ilike(pattern, escape="\\"),
                    Driver.last_name.ilike(pattern, escape="\\"),
                    Driver.email.ilike(pattern, escape="\\"),
                )
            )
        with storage_errors("list drivers"):
            result = await self.db.execute(
                stmt.order_by(Driver.id).offset(skip).limit(limit)
            )
        return [_to_result(d) for d in result.scalars().all()]
