"""Unit tests for CreateComplianceSnapshotUseCase."""

from datetime import date, timedelta

import pytest

from fleet_compliance.application.dtos.evaluation import (
    DocumentEvaluation,
    DriverEvaluation,
)
from fleet_compliance.application.use_cases.compliance.create_snapshot import (
    driver_details_json,
)
from fleet_compliance.domain.enums import DocumentStatus
from fleet_compliance.domain.exceptions import (
    ResourceNotFoundException,
    SnapshotCreationFailedException,
    StorageUnavailableException,
)
from tests.fakes import NOW, TENANT_ID


def _seed(store) -> None:
    store.add_driver("drv-1")
    store.add_driver("drv-2")
    store.add_driver("drv-3")
    for driver_id in ("drv-1", "drv-2"):
        store.add_document(driver_id, "Driver License", NOW + timedelta(days=100))
        store.add_document(driver_id, "Background Check", NOW + timedelta(days=100))
    store.add_document("drv-3", "Driver License", NOW + timedelta(days=100))


async def test_all_drivers_plus_one_tenant_row(use_cases, store) -> None:
    _seed(store)
    result = await use_cases.create_snapshot.execute(TENANT_ID, now=NOW)

    assert result.created == 4
    assert result.errors == 0
    driver_rows = [s for s in store.snapshots if s.driver_id is not None]
    tenant_rows = [s for s in store.snapshots if s.driver_id is None]
    assert sorted(s.driver_id for s in driver_rows) == ["drv-1", "drv-2", "drv-3"]
    (tenant_row,) = tenant_rows
    assert tenant_row.compliance_score == 67
    assert tenant_row.compliant is False
    assert tenant_row.missing_count == 1
    assert tenant_row.details_json["total_drivers"] == 3
    assert all(s.computed_at == NOW for s in store.snapshots)


async def test_tenant_row_agrees_with_driver_rows(use_cases, store) -> None:
    _seed(store)
    await use_cases.create_snapshot.execute(TENANT_ID, now=NOW)
    driver_rows = [s for s in store.snapshots if s.driver_id is not None]
    (tenant_row,) = [s for s in store.snapshots if s.driver_id is None]
    assert tenant_row.missing_count == sum(s.missing_count for s in driver_rows)
    assert tenant_row.details_json["compliant_drivers"] == sum(
        1 for s in driver_rows if s.compliant
    )


async def test_single_driver_snapshot(use_cases, store) -> None:
    _seed(store)
    result = await use_cases.create_snapshot.execute(TENANT_ID, "drv-3", now=NOW)

    assert result.created == 1
    (row,) = store.snapshots
    assert row.driver_id == "drv-3"
    assert row.compliance_score == 50
    assert row.details_json["missing_required_docs"] == ["Background Check"]
    statuses = {d["doc_type"]: d["status"] for d in row.details_json["documents"]}
    assert statuses == {"Background Check": "missing", "Driver License": "valid"}


async def test_single_unknown_driver_raises_before_writing(use_cases, store) -> None:
    with pytest.raises(ResourceNotFoundException):
        await use_cases.create_snapshot.execute(TENANT_ID, "nope", now=NOW)
    assert store.snapshots == []


async def test_failed_driver_row_is_counted(use_cases, repos, store) -> None:
    _seed(store)
    repos.snapshots.fail_driver_ids = {"drv-2"}
    result = await use_cases.create_snapshot.execute(TENANT_ID, now=NOW)
    assert result.created == 3
    assert result.errors == 1
    assert result.error_driver_ids == ("drv-2",)
    assert any(s.driver_id is None for s in store.snapshots)


async def test_every_row_failing_raises(use_cases, repos, store) -> None:
    _seed(store)
    repos.snapshots.fail_driver_ids = {"drv-1", "drv-2", "drv-3"}
    repos.snapshots.fail_tenant_row = True
    with pytest.raises(SnapshotCreationFailedException) as exc_info:
        await use_cases.create_snapshot.execute(TENANT_ID, now=NOW)
    assert exc_info.value.details["attempted"] == 4


async def test_storage_outage_propagates(use_cases, repos, store) -> None:
    _seed(store)
    repos.snapshots.unavailable = True
    with pytest.raises(StorageUnavailableException):
        await use_cases.create_snapshot.execute(TENANT_ID, now=NOW)


async def test_empty_tenant_records_only_the_tenant_row(use_cases, store) -> None:
    result = await use_cases.create_snapshot.execute(TENANT_ID, now=NOW)
    assert result.created == 1
    (row,) = store.snapshots
    assert row.driver_id is None
    assert row.compliance_score == 0
    assert row.compliant is True


def test_details_json_is_json_safe() -> None:
    evaluation = DriverEvaluation(
        driver_id="drv-1",
        compliant=True,
        compliance_score=100,
        expired_count=0,
        expiring_count=1,
        missing_count=0,
        documents=(
            DocumentEvaluation(
                doc_id="d1",
                doc_type="Driver License",
                expires_at=NOW + timedelta(days=3),
                days_until_expiry=3,
                status=DocumentStatus.EXPIRING,
                is_required=True,
            ),
            DocumentEvaluation(
                doc_id="d2",
                doc_type="Permit",
                expires_at=date(2025, 6, 1),
                days_until_expiry=91,
                status=DocumentStatus.VALID,
                is_required=False,
            ),
        ),
    )
    details = driver_details_json(evaluation)
    first, second = details["documents"]
    assert first["status"] == "expiring"
    assert first["expires_at"] == "2025-03-04T12:00:00Z"
    assert second["expires_at"] == "2025-06-01"
    assert details["missing_required_docs"] == []
