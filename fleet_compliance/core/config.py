"""Engine configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Compliance defaults are validated at load time and
handed to the rule provider as an explicit ComplianceDefaults value.
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fleet_compliance.core.constants import (
    ALERT_CHANNEL_IN_APP,
    DEFAULT_ALERT_WINDOWS,
    DEFAULT_GRACE_DAYS,
    DEFAULT_REQUIRED_DOCS,
    DEFAULT_ROLE,
    DRIVER_PAGE_SIZE,
    TOP_ISSUES_LIMIT,
)


class Settings(BaseSettings):
    """Engine settings loaded from environment and .env.

    All settings have defaults. DATABASE_URL is only required once a
    database session is requested (see persistence.database).
    """

    # App
    app_name: str = "fleet-compliance"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL via asyncpg)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None
    db_disable_jit: bool = True

    # Compliance rules
    compliance_default_role: str = DEFAULT_ROLE
    compliance_default_required_docs: list[str] = list(DEFAULT_REQUIRED_DOCS)
    compliance_default_alert_windows: list[int] = list(DEFAULT_ALERT_WINDOWS)
    compliance_default_grace_days: int = DEFAULT_GRACE_DAYS
    compliance_top_issues_limit: int = TOP_ISSUES_LIMIT
    compliance_alert_channel: str = ALERT_CHANNEL_IN_APP

    # Jobs: per-tenant wall-clock budget and how many tenants run at once.
    compliance_job_timeout_seconds: int = 60
    compliance_sweep_concurrency: int = 4
    compliance_driver_page_size: int = DRIVER_PAGE_SIZE

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_compliance_defaults(self) -> "Settings":
        """Reject malformed defaults before any evaluation runs."""
        if not self.compliance_default_alert_windows:
            raise ValueError("COMPLIANCE_DEFAULT_ALERT_WINDOWS must not be empty")
        if any(w <= 0 for w in self.compliance_default_alert_windows):
            raise ValueError(
                "COMPLIANCE_DEFAULT_ALERT_WINDOWS must contain positive day counts, "
                f"got: {self.compliance_default_alert_windows!r}"
            )
        if self.compliance_default_grace_days < 0:
            raise ValueError("COMPLIANCE_DEFAULT_GRACE_DAYS must be >= 0")
        if self.compliance_top_issues_limit < 1:
            raise ValueError("COMPLIANCE_TOP_ISSUES_LIMIT must be >= 1")
        if self.compliance_job_timeout_seconds < 1:
            raise ValueError("COMPLIANCE_JOB_TIMEOUT_SECONDS must be >= 1")
        if self.compliance_sweep_concurrency < 1:
            raise ValueError("COMPLIANCE_SWEEP_CONCURRENCY must be >= 1")
        if self.compliance_driver_page_size < 1:
            raise ValueError("COMPLIANCE_DRIVER_PAGE_SIZE must be >= 1")
        return self


@dataclass(frozen=True)
class ComplianceDefaults:
    """Built-in rule set used when a tenant has no rules for a role."""

    required_docs: tuple[str, ...] = DEFAULT_REQUIRED_DOCS
    alert_windows: tuple[int, ...] = DEFAULT_ALERT_WINDOWS
    grace_days: int = DEFAULT_GRACE_DAYS
    role: str = DEFAULT_ROLE

    @classmethod
    def from_settings(cls, settings: Settings) -> "ComplianceDefaults":
        return cls(
            required_docs=tuple(settings.compliance_default_required_docs),
            alert_windows=tuple(
                sorted(set(settings.compliance_default_alert_windows), reverse=True)
            ),
            grace_days=settings.compliance_default_grace_days,
            role=settings.compliance_default_role,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
