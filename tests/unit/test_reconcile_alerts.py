"""Unit tests for ReconcileAlertsUseCase (idempotence, error isolation, audit)."""

from datetime import timedelta

import pytest

from fleet_compliance.core.constants import (
    AUDIT_ACTION_ALERTS_GENERATED,
    AUDIT_RESOURCE_COMPLIANCE_ALERTS,
)
from fleet_compliance.domain.enums import AlertType
from fleet_compliance.domain.exceptions import (
    AlertReconciliationFailedException,
    ComplianceConfigurationException,
    StorageUnavailableException,
)
from tests.fakes import NOW, TENANT_ID


def _seed(store) -> None:
    store.add_rule("Driver License")
    store.add_rule("Medical Card")
    store.add_driver("drv-1")
    store.add_driver("drv-2")
    store.add_document("drv-1", "Driver License", NOW + timedelta(days=20), doc_id="dl-1")
    store.add_document("drv-1", "Medical Card", NOW + timedelta(days=90), doc_id="mc-1")
    store.add_document("drv-2", "Driver License", NOW - timedelta(days=4), doc_id="dl-2")
    store.add_document("drv-2", "Medical Card", NOW + timedelta(days=5), doc_id="mc-2")


async def test_first_run_sends_one_alert_per_condition(use_cases, store) -> None:
    _seed(store)
    result = await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)

    assert (result.sent, result.skipped, result.errors) == (3, 0, 0)
    assert sorted(a.dedupe_key for a in store.alerts) == [
        "drv-1:dl-1:expiring:30",
        "drv-2:dl-2:expired:0",
        "drv-2:mc-2:expiring:7",
    ]
    expired = next(a for a in store.alerts if a.doc_id == "dl-2")
    assert expired.alert_type is AlertType.EXPIRED
    assert expired.alert_window_days == 0
    assert all(a.channel == "in_app" for a in store.alerts)


async def test_second_run_sends_nothing(use_cases, store) -> None:
    _seed(store)
    await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)
    second = await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)

    assert second.sent == 0
    assert second.skipped == 3
    assert len(store.alerts) == 3
    assert len({a.dedupe_key for a in store.alerts}) == len(store.alerts)


async def test_crossing_a_tighter_window_sends_a_new_alert(use_cases, store) -> None:
    _seed(store)
    await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)
    later = await use_cases.reconcile_alerts.execute(
        TENANT_ID, now=NOW + timedelta(days=6)
    )
    assert later.sent == 2
    keys = {a.dedupe_key for a in store.alerts}
    assert "drv-1:dl-1:expiring:15" in keys
    assert "drv-2:mc-2:expired:0" in keys


async def test_failed_insert_is_counted_and_batch_continues(use_cases, repos, store) -> None:
    _seed(store)
    repos.alerts.fail_keys = {"drv-2:dl-2:expired:0"}

    result = await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)

    assert (result.sent, result.skipped, result.errors) == (2, 0, 1)
    assert result.error_dedupe_keys == ("drv-2:dl-2:expired:0",)
    assert result.candidates == 3

    repos.alerts.fail_keys = set()
    retry = await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)
    assert (retry.sent, retry.skipped) == (1, 2)


async def test_every_insert_failing_raises(use_cases, repos, store) -> None:
    _seed(store)
    repos.alerts.fail_all = True
    with pytest.raises(AlertReconciliationFailedException) as exc_info:
        await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)
    assert exc_info.value.details == {"tenant_id": TENANT_ID, "attempted": 3}
    assert store.audit == []


async def test_all_skipped_is_not_a_failure(use_cases, repos, store) -> None:
    _seed(store)
    await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)
    repos.alerts.fail_all = True
    result = await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)
    assert (result.sent, result.skipped, result.errors) == (0, 3, 0)


async def test_storage_outage_propagates(use_cases, repos, store) -> None:
    _seed(store)
    repos.alerts.unavailable = True
    with pytest.raises(StorageUnavailableException):
        await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)


async def test_configuration_error_writes_nothing(use_cases, store) -> None:
    _seed(store)
    store.add_rule("Hazmat", alert_windows=(0,))
    with pytest.raises(ComplianceConfigurationException):
        await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)
    assert store.alerts == []
    assert store.audit == []


async def test_one_audit_entry_per_run_with_candidates(use_cases, store) -> None:
    _seed(store)
    await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW, user_id="user-1")
    (entry,) = store.audit
    assert entry.action == AUDIT_ACTION_ALERTS_GENERATED
    assert entry.resource_type == AUDIT_RESOURCE_COMPLIANCE_ALERTS
    assert entry.user_id == "user-1"
    assert entry.new_values["sent"] == 3
    assert entry.new_values["candidates"] == 3
    assert entry.new_values["evaluated_at"] == NOW.isoformat()


async def test_no_candidates_means_no_audit_entry(use_cases, store) -> None:
    store.add_driver("drv-1")
    store.add_document("drv-1", "Driver License", NOW + timedelta(days=300))
    store.add_document("drv-1", "Background Check", NOW + timedelta(days=300))
    result = await use_cases.reconcile_alerts.execute(TENANT_ID, now=NOW)
    assert (result.sent, result.skipped, result.errors) == (0, 0, 0)
    assert store.audit == []
