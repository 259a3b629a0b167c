"""Compliance rule repository. Returns application DTOs."""

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleResult
from fleet_compliance.domain.value_objects import DocTypeKey
from fleet_compliance.infrastructure.persistence.models.compliance_rule import (
    ComplianceRule,
)
from fleet_compliance.infrastructure.persistence.repositories.base import (
    BaseRepository,
    storage_errors,
)


# Characters str.strip() removes in DocTypeKey; PostgreSQL trim() only strips spaces.
_DOC_TYPE_WHITESPACE = " \t\n\r\x0b\x0c"

def _to_result(r: ComplianceRule) -> ComplianceRuleResult:
    """Map ORM to DTO. alert_windows stays as stored; the rule provider validates."""
    return ComplianceRuleResult(
        id=r.id,
        tenant_id=r.tenant_id,
        role=r.role,
        doc_type=r.doc_type,
        required=r.required,
        grace_days=r.grace_days,
        alert_windows=tuple(r.alert_windows or ()),
    )


class ComplianceRuleRepository(BaseRepository[ComplianceRule]):
    """Rules per (tenant, role, doc_type)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ComplianceRule)

    async def list_by_role(
        self, tenant_id: str, role: str
    ) -> list[ComplianceRuleResult]:
        with storage_errors("list compliance rules"):
            result = await self.db.execute(
                select(ComplianceRule)
                .where(
                    ComplianceRule.tenant_id == tenant_id,
                    ComplianceRule.role == role,
                )
                .order_by(ComplianceRule.doc_type, ComplianceRule.id)
            )
        return [_to_result(r) for r in result.scalars().all()]

    async def get_by_doc_type(
        self, tenant_id: str, role: str, doc_type: str
    ) -> ComplianceRuleResult | None:
        """Case- and whitespace-insensitive match on doc_type."""
        row = await self._get_row_by_doc_type(tenant_id, role, doc_type)
        return _to_result(row) if row else None

    async def create_rule(
        self,
        tenant_id: str,
        role: str,
        doc_type: str,
        required: bool,
        grace_days: int,
        alert_windows: Sequence[int],
    ) -> ComplianceRuleResult:
        rule = ComplianceRule(
            tenant_id=tenant_id,
            role=role,
            doc_type=doc_type,
            required=required,
            grace_days=grace_days,
            alert_windows=list(alert_windows),
        )
        created = await self.create(rule)
        return _to_result(created)

    async def update_rule(
        self,
        tenant_id: str,
        rule_id: str,
        required: bool,
        grace_days: int,
        alert_windows: Sequence[int],
    ) -> ComplianceRuleResult | None:
        row = await self.get_by_id(tenant_id, rule_id)
        if row is None:
            return None
        row.required = required
        row.grace_days = grace_days
        row.alert_windows = list(alert_windows)
        with storage_errors("update compliance rule"):
            await self.db.flush()
            await self.db.refresh(row)
        return _to_result(row)

    async def delete_rule(self, tenant_id: str, rule_id: str) -> bool:
        row = await self.get_by_id(tenant_id, rule_id)
        if row is None:
            return False
        with storage_errors("delete compliance rule"):
            await self.db.delete(row)
            await self.db.flush()
        return True

    async def _get_row_by_doc_type(
        self, tenant_id: str, role: str, doc_type: str
    ) -> ComplianceRule | None:
        key = DocTypeKey.of(doc_type).value
        with storage_errors("get compliance rule"):
            result = await self.db.execute(
                select(ComplianceRule)
                .where(
                    ComplianceRule.tenant_id == tenant_id,
                    ComplianceRule.role == role,
                    func.lower(
                        func.btrim(ComplianceRule.doc_type, _DOC_TYPE_WHITESPACE)
                    )
                    == key,
                )
                .order_by(ComplianceRule.id)
                .limit(1)
            )
        return result.scalar_one_or_none()
