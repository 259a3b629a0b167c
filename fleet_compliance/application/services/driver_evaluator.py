"""Driver evaluator: fold one driver's documents against the rule set.

Pure (no I/O). Both the single-driver and batch use cases go through
DriverEvaluator.evaluate, so their results are identical for the same now.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime

from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleResult
from fleet_compliance.application.dtos.driver import DriverDocumentResult
from fleet_compliance.application.dtos.evaluation import (
    DocumentEvaluation,
    DriverEvaluation,
)
from fleet_compliance.application.services.document_classifier import (
    classify_document,
)
from fleet_compliance.core.constants import DEFAULT_ALERT_WINDOWS, DEFAULT_GRACE_DAYS
from fleet_compliance.domain.enums import DocumentStatus
from fleet_compliance.domain.value_objects import AlertWindows, DocTypeKey
from fleet_compliance.shared.utils.datetime import to_utc_datetime


def percent_half_up(part: int, whole: int) -> int:
    """round(100 * part / whole) with halves rounded up; integer arithmetic."""
    return (200 * part + whole) // (2 * whole)


def index_rules(
    rules: Iterable[ComplianceRuleResult],
) -> dict[DocTypeKey, ComplianceRuleResult]:
    """Map doc type key -> rule, ordered by doc type; first rule per key wins."""
    indexed: dict[DocTypeKey, ComplianceRuleResult] = {}
    for rule in sorted(rules, key=lambda r: (DocTypeKey.of(r.doc_type).value, r.id)):
        indexed.setdefault(DocTypeKey.of(rule.doc_type), rule)
    return indexed


def latest_document_by_type(
    documents: Iterable[DriverDocumentResult],
) -> dict[DocTypeKey, DriverDocumentResult]:
    """Pick one document per type: latest expires_at, then larger id on ties."""
    latest: dict[DocTypeKey, DriverDocumentResult] = {}
    for doc in documents:
        key = DocTypeKey.of(doc.doc_type)
        current = latest.get(key)
        if current is None or _doc_sort_key(doc) > _doc_sort_key(current):
            latest[key] = doc
    return latest


def _doc_sort_key(doc: DriverDocumentResult) -> tuple[datetime, str]:
    return (to_utc_datetime(doc.expires_at), doc.id)


class DriverEvaluator:
    """Evaluates a driver's documents against the rules for its role.

    Required rules produce one slot each (missing or classified). Other
    document types on file are classified for display with is_required=False
    and never affect counts, score or compliance.
    """

    def __init__(
        self,
        default_alert_windows: Sequence[int] = DEFAULT_ALERT_WINDOWS,
        default_grace_days: int = DEFAULT_GRACE_DAYS,
    ) -> None:
        self._default_windows = AlertWindows.of(default_alert_windows)
        self._default_grace_days = default_grace_days

    def evaluate(
        self,
        driver_id: str,
        documents: Iterable[DriverDocumentResult],
        rules: Sequence[ComplianceRuleResult],
        now: date | datetime,
    ) -> DriverEvaluation:
        rules_by_type = index_rules(rules)
        latest = latest_document_by_type(documents)

        slots: list[DocumentEvaluation] = []
        missing_required: list[str] = []
        expired_count = 0
        expiring_count = 0
        required_count = 0

        for key, rule in rules_by_type.items():
            if not rule.required:
                continue
            required_count += 1
            doc = latest.get(key)
            if doc is None:
                missing_required.append(rule.doc_type)
                slots.append(
                    DocumentEvaluation(
                        doc_id=None,
                        doc_type=rule.doc_type,
                        expires_at=None,
                        days_until_expiry=None,
                        status=DocumentStatus.MISSING,
                        is_required=True,
                    )
                )
                continue
            slot = self._classify(
                doc, rule.doc_type, rule.grace_days, rule.alert_windows, now, True
            )
            if slot.status is DocumentStatus.EXPIRED:
                expired_count += 1
            elif slot.status is DocumentStatus.EXPIRING:
                expiring_count += 1
            slots.append(slot)

        optional_keys = sorted(
            (k for k in latest if not (k in rules_by_type and rules_by_type[k].required)),
            key=lambda k: k.value,
        )
        for key in optional_keys:
            doc = latest[key]
            rule = rules_by_type.get(key)
            if rule is not None:
                slots.append(
                    self._classify(
                        doc, rule.doc_type, rule.grace_days, rule.alert_windows, now, False
                    )
                )
            else:
                slots.append(
                    self._classify(
                        doc,
                        doc.doc_type,
                        self._default_grace_days,
                        self._default_windows,
                        now,
                        False,
                    )
                )

        missing_count = len(missing_required)
        if required_count == 0:
            score = 100
        else:
            satisfied = required_count - expired_count - missing_count
            score = min(100, max(0, percent_half_up(satisfied, required_count)))

        return DriverEvaluation(
            driver_id=driver_id,
            compliant=expired_count == 0 and missing_count == 0,
            compliance_score=score,
            expired_count=expired_count,
            expiring_count=expiring_count,
            missing_count=missing_count,
            documents=tuple(slots),
            missing_required_docs=tuple(missing_required),
        )

    @staticmethod
    def _classify(
        doc: DriverDocumentResult,
        doc_type: str,
        grace_days: int,
        alert_windows: AlertWindows | Sequence[int],
        now: date | datetime,
        is_required: bool,
    ) -> DocumentEvaluation:
        classification = classify_document(
            doc.expires_at, grace_days, alert_windows, now
        )
        return DocumentEvaluation(
            doc_id=doc.id,
            doc_type=doc_type,
            expires_at=doc.expires_at,
            days_until_expiry=classification.days_until_expiry,
            status=classification.status,
            is_required=is_required,
        )
