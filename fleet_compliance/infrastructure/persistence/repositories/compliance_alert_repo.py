"""Compliance alert repository. Append-only; dedupe lookups by key."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_compliance.application.dtos.alert import (
    ComplianceAlertCreate,
    ComplianceAlertResult,
)
from fleet_compliance.domain.enums import AlertType
from fleet_compliance.infrastructure.persistence.models.compliance_alert import (
    ComplianceAlert,
)
from fleet_compliance.infrastructure.persistence.repositories.base import (
    BaseRepository,
    in_chunks,
    storage_errors,
)


def _to_result(a: ComplianceAlert) -> ComplianceAlertResult:
    """Map ORM to DTO."""
    return ComplianceAlertResult(
        id=a.id,
        tenant_id=a.tenant_id,
        driver_id=a.driver_id,
        doc_id=a.doc_id,
        alert_type=AlertType(a.alert_type),
        alert_window_days=a.alert_window_days,
        sent_at=a.sent_at,
        channel=a.channel,
        dedupe_key=a.dedupe_key,
    )


class ComplianceAlertRepository(BaseRepository[ComplianceAlert]):
    """Alert history. Inserts are savepoint-isolated; the unique
    (tenant_id, dedupe_key) constraint rejects a concurrent duplicate."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ComplianceAlert)

    async def get_existing_dedupe_keys(
        self, tenant_id: str, dedupe_keys: Iterable[str]
    ) -> set[str]:
        """Subset of dedupe_keys already recorded (one query per chunk of keys)."""
        existing: set[str] = set()
        for chunk in in_chunks(dedupe_keys):
            with storage_errors("get existing alert keys"):
                result = await self.db.execute(
                    select(ComplianceAlert.dedupe_key).where(
                        ComplianceAlert.tenant_id == tenant_id,
                        ComplianceAlert.dedupe_key.in_(chunk),
                    )
                )
            existing.update(result.scalars().all())
        return existing

    async def create_alert(self, data: ComplianceAlertCreate) -> ComplianceAlertResult:
        alert = ComplianceAlert(
            tenant_id=data.tenant_id,
            driver_id=data.driver_id,
            doc_id=data.doc_id,
            alert_type=AlertType(data.alert_type).value,
            alert_window_days=data.alert_window_days,
            sent_at=data.sent_at,
            channel=data.channel,
            dedupe_key=data.dedupe_key,
        )
        created = await self.create(alert)
        return _to_result(created)

