"""Document status classifier: expiry date + grace + alert windows -> status.

Pure functions; `now` is always passed in so results are deterministic.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from fleet_compliance.application.dtos.evaluation import DocumentClassification
from fleet_compliance.domain.enums import DocumentStatus
from fleet_compliance.domain.exceptions import ComplianceConfigurationException
from fleet_compliance.domain.value_objects import AlertWindows
from fleet_compliance.shared.utils.datetime import to_utc_datetime

_ONE_DAY = timedelta(days=1)


def days_until_expiry(expires_at: date | datetime, now: date | datetime) -> int:
    """Whole days from now until expires_at, floored (negative once past)."""
    return (to_utc_datetime(expires_at) - to_utc_datetime(now)) // _ONE_DAY


def resolve_alert_windows(alert_windows: AlertWindows | Sequence[int]) -> AlertWindows:
    """Validate raw windows; malformed windows are a configuration error."""
    if isinstance(alert_windows, AlertWindows):
        return alert_windows
    try:
        return AlertWindows.of(alert_windows)
    except ValueError as e:
        raise ComplianceConfigurationException(str(e)) from e


def classify_document(
    expires_at: date | datetime,
    grace_days: int,
    alert_windows: AlertWindows | Sequence[int],
    now: date | datetime,
) -> DocumentClassification:
    """Classify one document by expiry.

    - expired: more than grace_days past expiry
    - expiring: within the largest alert window, including the overdue
      band still covered by the grace period
    - valid: otherwise

    Raises:
        ComplianceConfigurationException: Negative grace_days or malformed windows.
    """
    if grace_days < 0:
        raise ComplianceConfigurationException(
            f"grace_days must be >= 0, got {grace_days}"
        )
    windows = resolve_alert_windows(alert_windows)
    days = days_until_expiry(expires_at, now)
    if days < -grace_days:
        status = DocumentStatus.EXPIRED
    elif days <= windows.largest:
        status = DocumentStatus.EXPIRING
    else:
        status = DocumentStatus.VALID
    return DocumentClassification(status=status, days_until_expiry=days)
