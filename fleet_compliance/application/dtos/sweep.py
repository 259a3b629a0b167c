"""DTOs for multi-tenant compliance sweeps (cron jobs)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TenantJobOutcome:
    """Result of one tenant's unit of work in a sweep.

    status is 'succeeded', 'failed' or 'timed_out'. result holds the
    use-case result when succeeded; error holds the error code otherwise.
    """

    tenant_id: str
    tenant_code: str
    status: str
    result: Any = None
    error: str | None = None


@dataclass(frozen=True)
class SweepResult:
    """All tenant outcomes of a sweep."""

    job: str
    outcomes: tuple[TenantJobOutcome, ...]

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "succeeded")

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "failed")

    @property
    def timed_out(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "timed_out")
