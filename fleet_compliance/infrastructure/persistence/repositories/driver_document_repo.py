"""Driver compliance document repository. Batched reads for evaluation."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_compliance.application.dtos.driver import DriverDocumentResult
from fleet_compliance.infrastructure.persistence.models.driver import (
    DriverComplianceDocument,
)
from fleet_compliance.infrastructure.persistence.repositories.base import (
    BaseRepository,
    in_chunks,
    storage_errors,
)
from fleet_compliance.shared.utils.datetime import ensure_utc


def _to_result(d: DriverComplianceDocument) -> DriverDocumentResult:
    """Map ORM to DTO."""
    return DriverDocumentResult(
        id=d.id,
        tenant_id=d.tenant_id,
        driver_id=d.driver_id,
        doc_type=d.doc_type,
        expires_at=ensure_utc(d.expires_at),
        status=d.status,
    )


class DriverDocumentRepository(BaseRepository[DriverComplianceDocument]):
    """Non-deleted documents for a set of drivers."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DriverComplianceDocument)

    async def list_for_drivers(
        self, tenant_id: str, driver_ids: Sequence[str]
    ) -> list[DriverDocumentResult]:
        """All documents for driver_ids (one query per chunk of ids)."""
        documents: list[DriverDocumentResult] = []
        for chunk in in_chunks(driver_ids):
            with storage_errors("list driver documents"):
                result = await self.db.execute(
                    select(DriverComplianceDocument)
                    .where(
                        DriverComplianceDocument.tenant_id == tenant_id,
                        DriverComplianceDocument.driver_id.in_(chunk),
                        DriverComplianceDocument.deleted_at.is_(None),
                    )
                    .order_by(
                        DriverComplianceDocument.driver_id,
                        DriverComplianceDocument.id,
                    )
                )
            documents.extend(_to_result(d) for d in result.scalars().all())
        return documents
