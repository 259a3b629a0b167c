"""Unit tests for ComplianceRuleService (upsert, delete, seed defaults)."""

import pytest

from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleUpsert
from fleet_compliance.domain.exceptions import (
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import TENANT_ID


async def test_list_rules_returns_defaults_when_none_stored(use_cases) -> None:
    rules = await use_cases.rules.list_rules(TENANT_ID)
    assert [r.doc_type for r in rules] == ["Background Check", "Driver License"]
    assert all(r.is_default for r in rules)


async def test_upsert_creates_then_updates_case_insensitively(use_cases, store) -> None:
    created, was_created = await use_cases.rules.upsert_rule(
        TENANT_ID,
        ComplianceRuleUpsert(doc_type=" Medical Card ", alert_windows=(7, 30)),
    )
    assert was_created is True
    assert created.doc_type == "Medical Card"
    assert created.role == "driver"
    assert created.alert_windows == (30, 7)

    updated, was_created = await use_cases.rules.upsert_rule(
        TENANT_ID,
        ComplianceRuleUpsert(doc_type="medical card", required=False, grace_days=3),
    )
    assert was_created is False
    assert updated.id == created.id
    assert updated.required is False
    assert updated.grace_days == 3
    assert updated.alert_windows == (30, 15, 7)
    assert len(store.rules) == 1


@pytest.mark.parametrize(
    ("data", "field"),
    [
        (ComplianceRuleUpsert(doc_type="  "), "doc_type"),
        (ComplianceRuleUpsert(doc_type="X", grace_days=-1), "grace_days"),
        (ComplianceRuleUpsert(doc_type="X", alert_windows=()), "alert_windows"),
        (ComplianceRuleUpsert(doc_type="X", alert_windows=(30, 0)), "alert_windows"),
    ],
)
async def test_upsert_rejects_invalid_input(use_cases, store, data, field) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await use_cases.rules.upsert_rule(TENANT_ID, data)
    assert exc_info.value.details["field"] == field
    assert store.rules == []


async def test_delete_rule(use_cases, store) -> None:
    rule = store.add_rule("Medical Card")
    await use_cases.rules.delete_rule(TENANT_ID, rule.id)
    assert store.rules == []


async def test_delete_unknown_rule_raises(use_cases) -> None:
    with pytest.raises(ResourceNotFoundException):
        await use_cases.rules.delete_rule(TENANT_ID, "missing-rule")


async def test_seed_default_rules_is_idempotent(use_cases, store) -> None:
    store.add_rule("Driver License", grace_days=9, alert_windows=(5,))
    first = await use_cases.rules.seed_default_rules(TENANT_ID)
    second = await use_cases.rules.seed_default_rules(TENANT_ID)

    assert [r.doc_type for r in first] == ["Background Check", "Driver License"]
    assert [r.id for r in first] == [r.id for r in second]
    assert len(store.rules) == 2
    license_rule = next(r for r in store.rules if r.doc_type == "Driver License")
    assert license_rule.grace_days == 0
    assert license_rule.alert_windows == (30, 15, 7)
