"""Shared utilities: datetime, generators, timeouts."""

from fleet_compliance.shared.utils.datetime import (
    ensure_utc,
    to_utc_datetime,
    utc_now,
)
from fleet_compliance.shared.utils.generators import generate_cuid
from fleet_compliance.shared.utils.timeouts import run_with_timeout

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "to_utc_datetime",
    "run_with_timeout",
]
