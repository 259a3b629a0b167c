"""Primary key generation for engine-written rows (CUID2)."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 string for a rule, alert, snapshot or audit row."""
    return str(_next_cuid())
