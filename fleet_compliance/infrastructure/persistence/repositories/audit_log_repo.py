"""Audit log repository. Append-only; implements IAuditLogRepository."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_compliance.application.dtos.audit_log import (
    AuditLogEntryCreate,
    AuditLogResult,
)
from fleet_compliance.infrastructure.persistence.models.audit_log import AuditLog
from fleet_compliance.infrastructure.persistence.repositories.base import BaseRepository


def _orm_to_result(row: AuditLog) -> AuditLogResult:
    """Map ORM to application DTO."""
    return AuditLogResult(
        id=row.id,
        tenant_id=row.tenant_id,
        user_id=row.user_id,
        action=row.action,
        resource_type=row.resource_type,
        resource_id=row.resource_id,
        new_values=row.new_values,
        timestamp=row.timestamp,
        success=row.success,
        error_message=row.error_message,
    )


class AuditLogRepository(BaseRepository[AuditLog]):
    """Append-only audit log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AuditLog)

    async def create_entry(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit log entry; return created record."""
        row = AuditLog(
            tenant_id=entry.tenant_id,
            user_id=entry.user_id,
            action=entry.action,
            resource_type=entry.resource_type,
            resource_id=entry.resource_id,
            new_values=entry.new_values,
            success=entry.success,
            error_message=entry.error_message,
        )
        created = await self.create(row)
        return _orm_to_result(created)

