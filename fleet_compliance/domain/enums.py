"""Domain enumerations for the compliance engine.

Enums represent fixed sets of domain values (document status, alert type).
"""

from enum import Enum


class DocumentStatus(str, Enum):
    """Compliance status of one document slot for a driver."""

    MISSING = "missing"
    EXPIRED = "expired"
    EXPIRING = "expiring"
    VALID = "valid"

    @property
    def is_problem(self) -> bool:
        """True for statuses that need attention (missing, expired, expiring)."""
        return self is not DocumentStatus.VALID

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class AlertType(str, Enum):
    """Kind of compliance alert recorded for a document."""

    EXPIRING = "expiring"
    EXPIRED = "expired"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid alert type values as strings."""
        return [t.value for t in cls]


class TenantStatus(str, Enum):
    """Tenant lifecycle status. Only active tenants are swept by jobs."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    ARCHIVED = "archived"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid tenant status values as strings."""
        return [s.value for s in cls]


class ExpiringDocumentFilter(str, Enum):
    """Filter for the expiring-documents listing."""

    ALL = "all"
    EXPIRED = "expired"
    EXPIRING = "expiring"
