"""Base repository: tenant-scoped reads, savepoint-isolated writes, error mapping."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_compliance.domain.exceptions import StorageUnavailableException
from fleet_compliance.infrastructure.persistence.database import Base

# Bound parameters per IN list; keeps very large tenants under driver limits.
IN_CHUNK_SIZE = 1000

ModelType = TypeVar("ModelType", bound=Base)


def in_chunks(values: Iterable[str], size: int = IN_CHUNK_SIZE) -> Iterator[list[str]]:
    """Distinct values in first-seen order, split into IN lists of at most size."""
    distinct = list(dict.fromkeys(values))
    for start in range(0, len(distinct), size):
        yield distinct[start : start + size]


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate connectivity failures into StorageUnavailableException.

    Data errors (constraint violations, bad input) are left as they are so
    callers can count them per unit.
    """
    try:
        yield
    except (
        OperationalError,
        InterfaceError,
        DisconnectionError,
        PoolTimeoutError,
        ConnectionError,
    ) as e:
        raise StorageUnavailableException(operation, type(e).__name__) from e
    except DBAPIError as e:
        if e.connection_invalidated:
            raise StorageUnavailableException(operation, "connection_invalidated") from e
        raise


class BaseRepository(Generic[ModelType]):
    """Base repository with tenant-scoped get_by_id and create.

    Every query filters on tenant_id explicitly (RLS is a second line of
    defence, not the only one). create runs inside a savepoint so a failed
    insert rolls back alone and the surrounding transaction stays usable.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, tenant_id: str, entity_id: str) -> ModelType | None:
        """Return a single record by primary key within tenant, or None."""
        model: Any = self.model
        with storage_errors(f"get {self.model.__tablename__}"):
            result = await self.db.execute(
                select(self.model).where(
                    model.id == entity_id, model.tenant_id == tenant_id
                )
            )
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Insert obj in a savepoint and refresh server defaults."""
        with storage_errors(f"insert {self.model.__tablename__}"):
            async with self.db.begin_nested():
                self.db.add(obj)
                await self.db.flush()
            await self.db.refresh(obj)
        return obj
