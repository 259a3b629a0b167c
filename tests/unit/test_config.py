"""Tests for Settings validation and ComplianceDefaults."""

import pytest
from pydantic import ValidationError

from fleet_compliance.core.config import ComplianceDefaults, Settings
from fleet_compliance.core.constants import (
    DEFAULT_ALERT_WINDOWS,
    DEFAULT_REQUIRED_DOCS,
    DEFAULT_ROLE,
)


def test_defaults_match_built_in_rule_set() -> None:
    defaults = ComplianceDefaults.from_settings(Settings())
    assert defaults.required_docs == DEFAULT_REQUIRED_DOCS
    assert defaults.alert_windows == DEFAULT_ALERT_WINDOWS
    assert defaults.grace_days == 0
    assert defaults.role == DEFAULT_ROLE


def test_windows_sorted_largest_first_and_deduplicated() -> None:
    settings = Settings(compliance_default_alert_windows=[7, 60, 7, 14])
    assert ComplianceDefaults.from_settings(settings).alert_windows == (60, 14, 7)


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMPLIANCE_DEFAULT_REQUIRED_DOCS", '["Medical Card"]')
    monkeypatch.setenv("COMPLIANCE_DEFAULT_GRACE_DAYS", "3")
    defaults = ComplianceDefaults.from_settings(Settings())
    assert defaults.required_docs == ("Medical Card",)
    assert defaults.grace_days == 3


@pytest.mark.parametrize(
    "overrides",
    [
        {"compliance_default_alert_windows": []},
        {"compliance_default_alert_windows": [30, 0]},
        {"compliance_default_grace_days": -1},
        {"compliance_top_issues_limit": 0},
        {"compliance_job_timeout_seconds": 0},
        {"compliance_sweep_concurrency": 0},
        {"compliance_driver_page_size": 0},
    ],
)
def test_malformed_settings_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)
