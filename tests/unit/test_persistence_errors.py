"""Tests for tenant scoping and storage error translation (no database)."""

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from fleet_compliance.domain.exceptions import (
    StorageUnavailableException,
    ValidationException,
)
from fleet_compliance.infrastructure.persistence.database import set_tenant_scope
from fleet_compliance.infrastructure.persistence.repositories.base import (
    storage_errors,
)


class RecordingSession:
    def __init__(self) -> None:
        self.statements: list[str] = []

    async def execute(self, statement) -> None:
        self.statements.append(str(statement))


async def test_tenant_scope_sets_local_setting() -> None:
    session = RecordingSession()
    await set_tenant_scope(session, "clx1abc-tenant_2")
    assert session.statements == ["SET LOCAL app.current_tenant_id = 'clx1abc-tenant_2'"]


@pytest.mark.parametrize("tenant_id", ["", "a b", "x'; DROP TABLE driver; --", "t" * 65])
async def test_tenant_scope_rejects_malformed_ids(tenant_id: str) -> None:
    session = RecordingSession()
    with pytest.raises(ValidationException):
        await set_tenant_scope(session, tenant_id)
    assert session.statements == []


def test_connection_errors_become_storage_unavailable() -> None:
    with pytest.raises(StorageUnavailableException) as exc_info:
        with storage_errors("insert compliance_alert"):
            raise OperationalError("INSERT", {}, Exception("server closed the connection"))
    assert exc_info.value.details == {
        "operation": "insert compliance_alert",
        "reason": "OperationalError",
    }


def test_os_connection_error_becomes_storage_unavailable() -> None:
    with pytest.raises(StorageUnavailableException):
        with storage_errors("list drivers"):
            raise ConnectionRefusedError()


def test_invalidated_connection_becomes_storage_unavailable() -> None:
    error = DBAPIError("SELECT 1", {}, Exception("gone"), connection_invalidated=True)
    with pytest.raises(StorageUnavailableException) as exc_info:
        with storage_errors("list rules"):
            raise error
    assert exc_info.value.details["reason"] == "connection_invalidated"


def test_data_errors_pass_through() -> None:
    with pytest.raises(IntegrityError):
        with storage_errors("insert compliance_alert"):
            raise IntegrityError("INSERT", {}, Exception("duplicate key"))
