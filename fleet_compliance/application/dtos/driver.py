"""DTOs for drivers and their compliance documents."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DriverResult:
    """Active driver read-model."""

    id: str
    tenant_id: str
    first_name: str
    last_name: str
    email: str | None
    license_number: str | None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class DriverDocumentResult:
    """Compliance document on file for a driver (non-deleted)."""

    id: str
    tenant_id: str
    driver_id: str
    doc_type: str
    expires_at: datetime | date
    status: str | None = None  # stored review status; not used for classification
