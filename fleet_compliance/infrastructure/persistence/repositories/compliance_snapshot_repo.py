"""Compliance snapshot repository. Append-only history rows."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_compliance.application.dtos.snapshot import (
    ComplianceSnapshotCreate,
    ComplianceSnapshotResult,
)
from fleet_compliance.infrastructure.persistence.models.compliance_snapshot import (
    ComplianceSnapshot,
)
from fleet_compliance.infrastructure.persistence.repositories.base import (
    BaseRepository,
    storage_errors,
)


def _to_result(s: ComplianceSnapshot) -> ComplianceSnapshotResult:
    """Map ORM to DTO."""
    return ComplianceSnapshotResult(
        id=s.id,
        tenant_id=s.tenant_id,
        driver_id=s.driver_id,
        compliance_score=s.compliance_score,
        compliant=s.compliant,
        expired_count=s.expired_count,
        expiring_count=s.expiring_count,
        missing_count=s.missing_count,
        computed_at=s.computed_at,
        details_json=s.details_json,
    )


class ComplianceSnapshotRepository(BaseRepository[ComplianceSnapshot]):
    """Snapshot history. Never updated or deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ComplianceSnapshot)

    async def create_snapshot(
        self, data: ComplianceSnapshotCreate
    ) -> ComplianceSnapshotResult:
        snapshot = ComplianceSnapshot(
            tenant_id=data.tenant_id,
            driver_id=data.driver_id,
            compliance_score=data.compliance_score,
            compliant=data.compliant,
            expired_count=data.expired_count,
            expiring_count=data.expiring_count,
            missing_count=data.missing_count,
            computed_at=data.computed_at,
            details_json=data.details_json,
        )
        created = await self.create(snapshot)
        return _to_result(created)

    async def list_history(
        self,
        tenant_id: str,
        driver_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ComplianceSnapshotResult]:
        """Newest first. driver_id None returns the tenant-level rows."""
        stmt = select(ComplianceSnapshot).where(ComplianceSnapshot.tenant_id == tenant_id)
        if driver_id is None:
            stmt = stmt.where(ComplianceSnapshot.driver_id.is_(None))
        else:
            stmt = stmt.where(ComplianceSnapshot.driver_id == driver_id)
        with storage_errors("list snapshots"):
            result = await self.db.execute(
                stmt.order_by(
                    ComplianceSnapshot.computed_at.desc(), ComplianceSnapshot.id.desc()
                )
                .offset(skip)
                .limit(limit)
            )
        return [_to_result(s) for s in result.scalars().all()]
