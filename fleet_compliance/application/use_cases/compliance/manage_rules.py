"""Compliance rule configuration: list, upsert, delete, seed defaults."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fleet_compliance.application.dtos.compliance_rule import (
    ComplianceRuleResult,
    ComplianceRuleUpsert,
)
from fleet_compliance.domain.exceptions import (
    ResourceNotFoundException,
    ValidationException,
)
from fleet_compliance.domain.value_objects import AlertWindows
from fleet_compliance.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from fleet_compliance.application.interfaces.repositories import (
        IComplianceRuleRepository,
    )
    from fleet_compliance.application.services.compliance_rule_provider import (
        ComplianceRuleProvider,
    )

logger = logging.getLogger(__name__)


class ComplianceRuleService:
    """Maintains a tenant's rule table.

    Rules are unique per (tenant, role, doc_type); doc_type is matched
    case-insensitively, so upserting "driver license" updates an existing
    "Driver License" rule instead of creating a second one.
    """

    def __init__(
        self,
        rule_repo: "IComplianceRuleRepository",
        rule_provider: "ComplianceRuleProvider",
    ) -> None:
        self._rule_repo = rule_repo
        self._rule_provider = rule_provider

    async def list_rules(
        self, tenant_id: str, role: str | None = None
    ) -> list[ComplianceRuleResult]:
        """Effective rules for role: stored rules, or the defaults (is_default=True)."""
        return await self._rule_provider.get_rules(tenant_id, role)

    @traced("compliance.upsert_rule")
    async def upsert_rule(
        self, tenant_id: str, data: ComplianceRuleUpsert
    ) -> tuple[ComplianceRuleResult, bool]:
        """Create or update the rule for (role, doc_type).

        Returns:
            (rule, created) where created is False when an existing rule
            was updated.

        Raises:
            ValidationException: Empty doc_type, negative grace_days or
                malformed alert windows.
        """
        doc_type = (data.doc_type or "").strip()
        if not doc_type:
            raise ValidationException("doc_type must not be empty", field="doc_type")
        if data.grace_days < 0:
            raise ValidationException(
                f"grace_days must be >= 0, got {data.grace_days}", field="grace_days"
            )
        defaults = self._rule_provider.defaults
        role = (data.role or defaults.role).strip()
        raw_windows = (
            data.alert_windows
            if data.alert_windows is not None
            else defaults.alert_windows
        )
        try:
            windows = AlertWindows.of(raw_windows).values
        except ValueError as e:
            raise ValidationException(str(e), field="alert_windows") from e

        existing = await self._rule_repo.get_by_doc_type(tenant_id, role, doc_type)
        if existing is not None:
            updated = await self._rule_repo.update_rule(
                tenant_id,
                existing.id,
                required=data.required,
                grace_days=data.grace_days,
                alert_windows=windows,
            )
            if updated is None:
                raise ResourceNotFoundException("compliance_rule", existing.id)
            logger.info(
                "Updated compliance rule %s (%s/%s) for tenant %s",
                updated.id,
                role,
                doc_type,
                tenant_id,
            )
            return updated, False

        created = await self._rule_repo.create_rule(
            tenant_id,
            role=role,
            doc_type=doc_type,
            required=data.required,
            grace_days=data.grace_days,
            alert_windows=windows,
        )
        logger.info(
            "Created compliance rule %s (%s/%s) for tenant %s",
            created.id,
            role,
            doc_type,
            tenant_id,
        )
        return created, True

    async def delete_rule(self, tenant_id: str, rule_id: str) -> None:
        """Delete a stored rule.

        Raises:
            ResourceNotFoundException: No such rule in tenant.
        """
        if not await self._rule_repo.delete_rule(tenant_id, rule_id):
            raise ResourceNotFoundException("compliance_rule", rule_id)
        logger.info("Deleted compliance rule %s for tenant %s", rule_id, tenant_id)

    @traced("compliance.seed_default_rules")
    async def seed_default_rules(
        self, tenant_id: str, role: str | None = None
    ) -> list[ComplianceRuleResult]:
        """Upsert one required rule per default doc type (idempotent)."""
        defaults = self._rule_provider.defaults
        role = role or defaults.role
        seeded: list[ComplianceRuleResult] = []
        for doc_type in sorted(defaults.required_docs):
            rule, _ = await self.upsert_rule(
                tenant_id,
                ComplianceRuleUpsert(
                    doc_type=doc_type,
                    role=role,
                    required=True,
                    grace_days=defaults.grace_days,
                    alert_windows=tuple(defaults.alert_windows),
                ),
            )
            seeded.append(rule)
        return seeded
