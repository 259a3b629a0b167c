"""Tenant aggregator: reduce driver evaluations to a tenant summary."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping

from fleet_compliance.application.dtos.evaluation import (
    DriverEvaluation,
    IssueCount,
    TenantEvaluation,
)
from fleet_compliance.application.services.driver_evaluator import percent_half_up
from fleet_compliance.core.constants import TOP_ISSUES_LIMIT


def _issue_doc_types(evaluation: DriverEvaluation) -> set[str]:
    """Required doc types that are missing, expired or expiring for one driver."""
    return {d.doc_type for d in evaluation.required_documents if d.status.is_problem}


def rank_top_issues(
    evaluations: Iterable[DriverEvaluation], limit: int = TOP_ISSUES_LIMIT
) -> tuple[IssueCount, ...]:
    """Count drivers per problem doc type; count desc, then doc type asc."""
    tally: Counter[str] = Counter()
    for evaluation in evaluations:
        tally.update(_issue_doc_types(evaluation))
    ranked = sorted(tally.items(), key=lambda item: (-item[1], item[0]))
    return tuple(IssueCount(doc_type=t, count=c) for t, c in ranked[:limit])


def aggregate_tenant(
    tenant_id: str,
    evaluations: Mapping[str, DriverEvaluation] | Iterable[DriverEvaluation],
    top_issues_limit: int = TOP_ISSUES_LIMIT,
) -> TenantEvaluation:
    """Build the tenant rollup from per-driver evaluations.

    compliance_percentage is 0 for a tenant with no drivers.
    """
    if isinstance(evaluations, Mapping):
        items = list(evaluations.values())
    else:
        items = list(evaluations)
    total = len(items)
    compliant = sum(1 for e in items if e.compliant)
    return TenantEvaluation(
        tenant_id=tenant_id,
        total_drivers=total,
        compliant_drivers=compliant,
        non_compliant_drivers=total - compliant,
        compliance_percentage=percent_half_up(compliant, total) if total else 0,
        expired_count=sum(e.expired_count for e in items),
        expiring_count=sum(e.expiring_count for e in items),
        missing_count=sum(e.missing_count for e in items),
        top_issues=rank_top_issues(items, top_issues_limit),
    )
