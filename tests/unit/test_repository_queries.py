"""Query shape of the SQLAlchemy repositories, checked without a database."""

from sqlalchemy.dialects import postgresql

from fleet_compliance.infrastructure.persistence.repositories import (
    ComplianceAlertRepository,
    ComplianceRuleRepository,
    DriverDocumentRepository,
)
from fleet_compliance.infrastructure.persistence.repositories.base import (
    IN_CHUNK_SIZE,
    in_chunks,
)
from tests.fakes import TENANT_ID


class FakeResult:
    def __init__(self, rows: list) -> None:
        self._rows = rows

    def scalars(self) -> "FakeResult":
        return self

    def all(self) -> list:
        return list(self._rows)

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None


class RecordingSession:
    """Records executed statements and replays canned rows per call."""

    def __init__(self, rows_per_call: list[list] | None = None) -> None:
        self.statements: list = []
        self._rows = iter(rows_per_call or [])

    async def execute(self, statement) -> FakeResult:
        self.statements.append(statement)
        return FakeResult(next(self._rows, []))


def _literal_sql(statement) -> str:
    return str(
        statement.compile(
            dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}
        )
    )


def test_in_chunks_dedupes_and_splits() -> None:
    chunks = list(in_chunks(["a", "b", "a", "c", "d"], size=2))
    assert chunks == [["a", "b"], ["c", "d"]]
    assert list(in_chunks([])) == []


async def test_existing_dedupe_keys_are_read_in_bounded_chunks() -> None:
    keys = [f"k-{i}" for i in range(2 * IN_CHUNK_SIZE + 500)]
    session = RecordingSession([["k-0"], ["k-1500"], []])
    repo = ComplianceAlertRepository(session)

    existing = await repo.get_existing_dedupe_keys(TENANT_ID, keys + ["k-0"])

    assert existing == {"k-0", "k-1500"}
    assert len(session.statements) == 3
    sizes = [_literal_sql(s).count("'k-") for s in session.statements]
    assert sizes == [IN_CHUNK_SIZE, IN_CHUNK_SIZE, 500]
    assert all(f"'{TENANT_ID}'" in _literal_sql(s) for s in session.statements)


async def test_no_dedupe_keys_means_no_query() -> None:
    session = RecordingSession()
    assert await ComplianceAlertRepository(session).get_existing_dedupe_keys(TENANT_ID, []) == set()
    assert session.statements == []


async def test_documents_are_read_in_bounded_chunks() -> None:
    driver_ids = [f"drv-{i}" for i in range(IN_CHUNK_SIZE + 1)]
    session = RecordingSession()

    docs = await DriverDocumentRepository(session).list_for_drivers(TENANT_ID, driver_ids)

    assert docs == []
    sizes = [_literal_sql(s).count("'drv-") for s in session.statements]
    assert sizes == [IN_CHUNK_SIZE, 1]


async def test_rule_doc_type_match_strips_all_whitespace() -> None:
    session = RecordingSession()
    found = await ComplianceRuleRepository(session).get_by_doc_type(
        TENANT_ID, "driver", "\tMedical Card\n"
    )

    assert found is None
    (statement,) = session.statements
    compiled = statement.compile(dialect=postgresql.dialect())
    assert "lower(btrim(compliance_rule.doc_type" in str(compiled)
    params = list(compiled.params.values())
    assert " \t\n\r\x0b\x0c" in params
    assert "medical card" in params
