"""Shared utilities: datetime, generators, timeouts, and telemetry helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from fleet_compliance.shared.utils import (
    ensure_utc,
    generate_cuid,
    run_with_timeout,
    to_utc_datetime,
    utc_now,
)

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "run_with_timeout",
    "to_utc_datetime",
    "utc_now",
]
