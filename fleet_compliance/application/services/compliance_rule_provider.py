"""Rule store accessor: a tenant's rules for a role, or the defaults.

Defaults arrive as an explicit ComplianceDefaults value at construction.
Every rule returned has validated alert windows (largest first) and a
non-negative grace period; anything else is a configuration error raised
before the caller writes.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleResult
from fleet_compliance.core.config import ComplianceDefaults
from fleet_compliance.core.constants import DEFAULT_RULE_ID_PREFIX
from fleet_compliance.domain.exceptions import ComplianceConfigurationException
from fleet_compliance.domain.value_objects import AlertWindows

if TYPE_CHECKING:
    from fleet_compliance.application.interfaces.repositories import (
        IComplianceRuleRepository,
    )

logger = logging.getLogger(__name__)


class ComplianceRuleProvider:
    """Resolves the effective rule set for (tenant, role)."""

    def __init__(
        self,
        rule_repo: "IComplianceRuleRepository",
        defaults: ComplianceDefaults,
    ) -> None:
        self._rule_repo = rule_repo
        self._defaults = defaults

    @property
    def defaults(self) -> ComplianceDefaults:
        return self._defaults

    async def get_rules(
        self, tenant_id: str, role: str | None = None
    ) -> list[ComplianceRuleResult]:
        """Return configured rules for role, or the default rules when none exist.

        Raises:
            ComplianceConfigurationException: A stored rule is malformed, or
                neither stored nor default rules exist.
        """
        role = role or self._defaults.role
        rules = await self._rule_repo.list_by_role(tenant_id, role)
        if not rules:
            rules = self.default_rules(tenant_id, role)
            logger.debug(
                "No compliance rules for tenant %s role %s; using %d default rule(s)",
                tenant_id,
                role,
                len(rules),
            )
        if not rules:
            raise ComplianceConfigurationException(
                f"No compliance rules resolvable for role '{role}'",
                tenant_id=tenant_id,
            )
        return [self._validated(tenant_id, r) for r in rules]

    def default_rules(self, tenant_id: str, role: str) -> list[ComplianceRuleResult]:
        """Unpersisted rules built from the configured defaults."""
        return [
            ComplianceRuleResult(
                id=f"{DEFAULT_RULE_ID_PREFIX}{doc_type}",
                tenant_id=tenant_id,
                role=role,
                doc_type=doc_type,
                required=True,
                grace_days=self._defaults.grace_days,
                alert_windows=tuple(self._defaults.alert_windows),
                is_default=True,
            )
            for doc_type in sorted(self._defaults.required_docs)
        ]

    @staticmethod
    def _validated(tenant_id: str, rule: ComplianceRuleResult) -> ComplianceRuleResult:
        if rule.grace_days < 0:
            raise ComplianceConfigurationException(
                f"Rule for '{rule.doc_type}' has negative grace_days ({rule.grace_days})",
                tenant_id=tenant_id,
                doc_type=rule.doc_type,
            )
        try:
            windows = AlertWindows.of(rule.alert_windows)
        except ValueError as e:
            raise ComplianceConfigurationException(
                f"Rule for '{rule.doc_type}' has malformed alert windows: {e}",
                tenant_id=tenant_id,
                doc_type=rule.doc_type,
            ) from e
        if windows.values == tuple(rule.alert_windows):
            return rule
        return replace(rule, alert_windows=windows.values)
