"""DTOs for tenants (listing targets of compliance jobs)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantResult:
    """Tenant read-model."""

    id: str
    code: str
    name: str
    status: str
