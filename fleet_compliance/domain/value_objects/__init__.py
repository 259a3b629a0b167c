"""Domain value objects (immutable, self-validating)."""

from fleet_compliance.domain.value_objects.core import (
    AlertWindows,
    DocTypeKey,
)

__all__ = ["AlertWindows", "DocTypeKey"]
