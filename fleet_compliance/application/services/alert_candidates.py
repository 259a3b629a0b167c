"""Alert candidate derivation and dedupe keys.

A candidate is one (driver, document, alert type, window) condition. The
dedupe key identifies it across runs, so a condition is recorded once and a
document produces a new key each time it crosses a tighter window.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from fleet_compliance.application.dtos.alert import AlertCandidate
from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleResult
from fleet_compliance.application.dtos.evaluation import DriverEvaluation
from fleet_compliance.application.services.document_classifier import (
    resolve_alert_windows,
)
from fleet_compliance.application.services.driver_evaluator import index_rules
from fleet_compliance.core.constants import DEDUPE_KEY_SEP, EXPIRED_ALERT_WINDOW_DAYS
from fleet_compliance.domain.enums import AlertType, DocumentStatus
from fleet_compliance.domain.value_objects import DocTypeKey


def build_dedupe_key(
    driver_id: str, doc_id: str, alert_type: AlertType, alert_window_days: int
) -> str:
    """driver_id:doc_id:alert_type:window."""
    return DEDUPE_KEY_SEP.join(
        (driver_id, doc_id, AlertType(alert_type).value, str(alert_window_days))
    )


def derive_alert_candidates(
    evaluations: Iterable[DriverEvaluation],
    rules: Sequence[ComplianceRuleResult],
) -> list[AlertCandidate]:
    """Return candidates for required documents that are expired or expiring.

    Expired documents yield one candidate with window 0. Expiring documents
    yield one candidate for the tightest window they have crossed.
    """
    rules_by_type = index_rules(rules)
    candidates: list[AlertCandidate] = []
    for evaluation in evaluations:
        for doc in evaluation.required_documents:
            if doc.doc_id is None or doc.days_until_expiry is None:
                continue
            if doc.status is DocumentStatus.EXPIRED:
                alert_type = AlertType.EXPIRED
                window = EXPIRED_ALERT_WINDOW_DAYS
            elif doc.status is DocumentStatus.EXPIRING:
                rule = rules_by_type.get(DocTypeKey.of(doc.doc_type))
                if rule is None:
                    continue
                alert_type = AlertType.EXPIRING
                window = resolve_alert_windows(rule.alert_windows).tightest_crossed(
                    doc.days_until_expiry
                )
            else:
                continue
            candidates.append(
                AlertCandidate(
                    driver_id=evaluation.driver_id,
                    doc_id=doc.doc_id,
                    doc_type=doc.doc_type,
                    expires_at=doc.expires_at,
                    days_until_expiry=doc.days_until_expiry,
                    alert_type=alert_type,
                    alert_window_days=window,
                    dedupe_key=build_dedupe_key(
                        evaluation.driver_id, doc.doc_id, alert_type, window
                    ),
                )
            )
    return candidates
