"""Compliance repository integration tests. Require Postgres; session is rolled back after each test."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from fleet_compliance.application.dtos.alert import ComplianceAlertCreate
from fleet_compliance.application.dtos.snapshot import ComplianceSnapshotCreate
from fleet_compliance.core.config import Settings
from fleet_compliance.domain.enums import AlertType
from fleet_compliance.infrastructure.composition import build_compliance_use_cases
from fleet_compliance.infrastructure.persistence.database import set_tenant_scope
from fleet_compliance.infrastructure.persistence.models import (
    ComplianceRule,
    Driver,
    DriverComplianceDocument,
    Tenant,
)
from fleet_compliance.infrastructure.persistence.repositories import (
    ComplianceAlertRepository,
    ComplianceRuleRepository,
    ComplianceSnapshotRepository,
    DriverDocumentRepository,
    DriverRepository,
)
from fleet_compliance.shared.utils.generators import generate_cuid

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
async def tenant_id(db_session) -> str:
    """A fresh tenant with the session scoped to it."""
    tenant = Tenant(code=f"t-{generate_cuid()[:10]}", name="Repo Test Fleet")
    db_session.add(tenant)
    await db_session.flush()
    await set_tenant_scope(db_session, tenant.id)
    return tenant.id


async def _add_driver(db_session, tenant_id: str, first_name: str, **kwargs) -> Driver:
    driver = Driver(
        tenant_id=tenant_id, first_name=first_name, last_name="Test", **kwargs
    )
    db_session.add(driver)
    await db_session.flush()
    return driver


async def _add_document(
    db_session, tenant_id: str, driver_id: str, doc_type: str, expires_at, **kwargs
) -> DriverComplianceDocument:
    doc = DriverComplianceDocument(
        tenant_id=tenant_id,
        driver_id=driver_id,
        doc_type=doc_type,
        expires_at=expires_at,
        **kwargs,
    )
    db_session.add(doc)
    await db_session.flush()
    return doc


@pytest.mark.requires_db
async def test_rule_crud_and_doc_type_match(db_session, tenant_id) -> None:
    repo = ComplianceRuleRepository(db_session)
    created = await repo.create_rule(tenant_id, "driver", "Medical Card", True, 2, [30, 7])
    assert created.id
    assert created.alert_windows == (30, 7)

    found = await repo.get_by_doc_type(tenant_id, "driver", "  medical CARD ")
    assert found is not None
    assert found.id == created.id

    updated = await repo.update_rule(tenant_id, created.id, False, 0, [14])
    assert updated.required is False
    assert updated.alert_windows == (14,)
    assert [r.id for r in await repo.list_by_role(tenant_id, "driver")] == [created.id]

    assert await repo.delete_rule(tenant_id, created.id) is True
    assert await repo.delete_rule(tenant_id, created.id) is False
    assert await repo.list_by_role(tenant_id, "driver") == []


@pytest.mark.requires_db
async def test_doc_type_match_ignores_tabs_and_newlines(db_session, tenant_id) -> None:
    """Rows written by the host application may carry untrimmed whitespace."""
    db_session.add(
        ComplianceRule(
            tenant_id=tenant_id,
            role="driver",
            doc_type="\tMedical Card\r\n",
            required=True,
            grace_days=0,
            alert_windows=[30],
        )
    )
    await db_session.flush()

    found = await ComplianceRuleRepository(db_session).get_by_doc_type(
        tenant_id, "driver", "medical card"
    )
    assert found is not None
    assert found.doc_type == "\tMedical Card\r\n"


@pytest.mark.requires_db
async def test_soft_deleted_drivers_and_documents_are_excluded(db_session, tenant_id) -> None:
    active = await _add_driver(db_session, tenant_id, "Ana", email="ana@fleet.test")
    gone = await _add_driver(db_session, tenant_id, "Ben", deleted_at=NOW)
    await _add_document(db_session, tenant_id, active.id, "Driver License", NOW)
    await _add_document(
        db_session, tenant_id, active.id, "Background Check", NOW, deleted_at=NOW
    )
    await _add_document(db_session, tenant_id, gone.id, "Driver License", NOW)

    drivers = DriverRepository(db_session)
    assert [d.id for d in await drivers.list_active(tenant_id)] == [active.id]
    assert await drivers.get_active_by_id(tenant_id, gone.id) is None
    assert [d.id for d in await drivers.list_active(tenant_id, search="ANA@")] == [active.id]
    assert await drivers.list_active(tenant_id, search="%") == []

    docs = await DriverDocumentRepository(db_session).list_for_drivers(
        tenant_id, [active.id, active.id]
    )
    assert [d.doc_type for d in docs] == ["Driver License"]


@pytest.mark.requires_db
async def test_duplicate_dedupe_key_fails_alone(db_session, tenant_id) -> None:
    driver = await _add_driver(db_session, tenant_id, "Cy")
    doc = await _add_document(db_session, tenant_id, driver.id, "Driver License", NOW)
    repo = ComplianceAlertRepository(db_session)
    alert = ComplianceAlertCreate(
        tenant_id=tenant_id,
        driver_id=driver.id,
        doc_id=doc.id,
        alert_type=AlertType.EXPIRED,
        alert_window_days=0,
        channel="in_app",
        dedupe_key=f"{driver.id}:{doc.id}:expired:0",
        sent_at=NOW,
    )
    created = await repo.create_alert(alert)
    assert created.alert_type is AlertType.EXPIRED

    with pytest.raises(IntegrityError):
        await repo.create_alert(alert)

    # savepoint rolled back; the outer transaction is still usable
    keys = await repo.get_existing_dedupe_keys(tenant_id, [alert.dedupe_key, "other"])
    assert keys == {alert.dedupe_key}


@pytest.mark.requires_db
async def test_snapshot_history_newest_first(db_session, tenant_id) -> None:
    repo = ComplianceSnapshotRepository(db_session)
    for days in (0, 1):
        await repo.create_snapshot(
            ComplianceSnapshotCreate(
                tenant_id=tenant_id,
                driver_id=None,
                compliance_score=50 + days,
                compliant=False,
                expired_count=0,
                expiring_count=0,
                missing_count=1,
                computed_at=NOW + timedelta(days=days),
                details_json={"total_drivers": 2},
            )
        )
    history = await repo.list_history(tenant_id)
    assert [s.compliance_score for s in history] == [51, 50]
    assert history[0].details_json == {"total_drivers": 2}


@pytest.mark.requires_db
async def test_reconcile_and_snapshot_end_to_end(db_session, tenant_id) -> None:
    driver = await _add_driver(db_session, tenant_id, "Dee")
    await _add_document(
        db_session, tenant_id, driver.id, "Driver License", NOW - timedelta(days=1)
    )
    use_cases = build_compliance_use_cases(db_session, Settings())

    first = await use_cases.reconcile_alerts.execute(tenant_id, now=NOW)
    second = await use_cases.reconcile_alerts.execute(tenant_id, now=NOW)
    assert first.sent == 1
    assert (second.sent, second.skipped) == (0, 1)

    snapshots = await use_cases.create_snapshot.execute(tenant_id, now=NOW)
    assert snapshots.created == 2
    (tenant_row,) = await ComplianceSnapshotRepository(db_session).list_history(tenant_id)
    assert tenant_row.compliance_score == 0
    assert tenant_row.missing_count == 1
