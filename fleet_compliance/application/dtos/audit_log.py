"""DTOs for the audit log (append-only engine action log)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditLogEntryCreate:
    """Input for appending one audit log record. Append-only; no update."""

    tenant_id: str
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    new_values: dict[str, Any] | None
    success: bool = True
    error_message: str | None = None


@dataclass(frozen=True)
class AuditLogResult:
    """Single audit log entry."""

    id: str
    tenant_id: str
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    new_values: dict[str, Any] | None
    timestamp: datetime
    success: bool
    error_message: str | None
