"""Domain value objects for the compliance engine.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class AlertWindows:
    """Ordered set of alert windows (days before expiry), largest first.

    Windows must be positive integers; duplicates collapse. An empty set
    is rejected because the classifier needs a largest window.
    """

    values: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("Alert windows must contain at least one day count")
        for w in self.values:
            if isinstance(w, bool) or not isinstance(w, int):
                raise ValueError(f"Alert window must be an integer, got {w!r}")
            if w <= 0:
                raise ValueError(f"Alert window must be positive, got {w}")
        normalized = tuple(sorted(set(self.values), reverse=True))
        object.__setattr__(self, "values", normalized)

    @classmethod
    def of(cls, windows: Iterable[int]) -> "AlertWindows":
        return cls(tuple(windows))

    @property
    def largest(self) -> int:
        return self.values[0]

    def tightest_crossed(self, days_until_expiry: int) -> int:
        """Smallest window still >= days_until_expiry.

        Overdue documents (negative days) map to the smallest window.
        Callers only ask for documents inside the largest window.
        """
        crossed = [w for w in self.values if days_until_expiry <= w]
        if not crossed:
            raise ValueError(
                f"{days_until_expiry} days is outside the largest window {self.largest}"
            )
        return crossed[-1]


@dataclass(frozen=True)
class DocTypeKey:
    """Case- and whitespace-insensitive key for matching document types to rules."""

    value: str

    @classmethod
    def of(cls, doc_type: str | None) -> "DocTypeKey":
        return cls((doc_type or "").strip().lower())
