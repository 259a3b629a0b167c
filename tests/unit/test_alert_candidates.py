"""Unit tests for alert candidate derivation and dedupe keys."""

from datetime import timedelta

import pytest

from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleResult
from fleet_compliance.application.dtos.driver import DriverDocumentResult
from fleet_compliance.application.services.alert_candidates import (
    build_dedupe_key,
    derive_alert_candidates,
)
from fleet_compliance.application.services.driver_evaluator import DriverEvaluator
from fleet_compliance.domain.enums import AlertType
from tests.fakes import NOW, TENANT_ID


def _rule(doc_type: str, required: bool = True, grace_days: int = 0) -> ComplianceRuleResult:
    return ComplianceRuleResult(
        id=f"rule-{doc_type}",
        tenant_id=TENANT_ID,
        role="driver",
        doc_type=doc_type,
        required=required,
        grace_days=grace_days,
        alert_windows=(30, 15, 7),
    )


def _candidates_for(days: int, rules: list[ComplianceRuleResult] | None = None):
    rules = rules or [_rule("Driver License")]
    doc = DriverDocumentResult(
        id="doc-1",
        tenant_id=TENANT_ID,
        driver_id="drv-1",
        doc_type="Driver License",
        expires_at=NOW + timedelta(days=days),
    )
    evaluation = DriverEvaluator().evaluate("drv-1", [doc], rules, NOW)
    return derive_alert_candidates([evaluation], rules)


def test_build_dedupe_key() -> None:
    assert build_dedupe_key("drv-1", "doc-1", AlertType.EXPIRING, 15) == (
        "drv-1:doc-1:expiring:15"
    )
    assert build_dedupe_key("drv-1", "doc-1", AlertType.EXPIRED, 0) == (
        "drv-1:doc-1:expired:0"
    )


@pytest.mark.parametrize(
    ("days", "window"),
    [(30, 30), (16, 30), (15, 15), (8, 15), (7, 7), (0, 7)],
)
def test_expiring_uses_tightest_crossed_window(days: int, window: int) -> None:
    (candidate,) = _candidates_for(days)
    assert candidate.alert_type is AlertType.EXPIRING
    assert candidate.alert_window_days == window
    assert candidate.dedupe_key == f"drv-1:doc-1:expiring:{window}"
    assert candidate.days_until_expiry == days


def test_expired_document_uses_window_zero() -> None:
    (candidate,) = _candidates_for(-3)
    assert candidate.alert_type is AlertType.EXPIRED
    assert candidate.alert_window_days == 0
    assert candidate.dedupe_key == "drv-1:doc-1:expired:0"


def test_overdue_within_grace_uses_smallest_window() -> None:
    (candidate,) = _candidates_for(-2, [_rule("Driver License", grace_days=5)])
    assert candidate.alert_type is AlertType.EXPIRING
    assert candidate.alert_window_days == 7


def test_valid_document_has_no_candidate() -> None:
    assert _candidates_for(31) == []


def test_missing_and_optional_documents_have_no_candidates() -> None:
    rules = [_rule("Driver License", required=False), _rule("Medical Card")]
    assert _candidates_for(-10, rules) == []


def test_crossing_a_tighter_window_changes_the_key() -> None:
    (first,) = _candidates_for(20)
    (second,) = _candidates_for(10)
    assert first.dedupe_key != second.dedupe_key
