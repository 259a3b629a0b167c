"""Application services: pure evaluation logic and the rule provider."""

from fleet_compliance.application.services.alert_candidates import (
    build_dedupe_key,
    derive_alert_candidates,
)
from fleet_compliance.application.services.compliance_rule_provider import (
    ComplianceRuleProvider,
)
from fleet_compliance.application.services.document_classifier import (
    classify_document,
    days_until_expiry,
)
from fleet_compliance.application.services.driver_evaluator import DriverEvaluator
from fleet_compliance.application.services.tenant_aggregator import (
    aggregate_tenant,
    rank_top_issues,
)

__all__ = [
    "ComplianceRuleProvider",
    "DriverEvaluator",
    "aggregate_tenant",
    "build_dedupe_key",
    "classify_document",
    "days_until_expiry",
    "derive_alert_candidates",
    "rank_top_issues",
]
