"""Pytest configuration and fixtures for the compliance engine.

Unit tests run against the in-memory repositories in tests.fakes, wired
through the real composition root. DB-dependent fixtures use
fleet_compliance.infrastructure.persistence.database and skip when Postgres
is not configured.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

import fleet_compliance.infrastructure.persistence.database as database
from fleet_compliance.infrastructure.composition import ComplianceUseCases
from tests.fakes import InMemoryComplianceStore, InMemoryRepositories


@pytest.fixture
def store() -> InMemoryComplianceStore:
    """Empty in-memory store for tenant-a."""
    return InMemoryComplianceStore()


@pytest.fixture
def repos(store: InMemoryComplianceStore) -> InMemoryRepositories:
    return InMemoryRepositories(store)


@pytest.fixture
def use_cases(repos: InMemoryRepositories) -> ComplianceUseCases:
    """Compliance use cases wired on the in-memory repositories (default settings)."""
    return repos.wire()


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL pointing at a migrated Postgres schema. Skips
    (pytest.skip) when it is not configured. Use @pytest.mark.requires_db to
    mark tests that need this fixture; run without DB via:
    pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("Postgres not configured: set DATABASE_URL")
    async with database.AsyncSessionLocal() as session:
        await session.begin()
        yield session
        await session.rollback()
