"""Core constants: compliance defaults and shared literal values.

Single source of truth for the built-in rule set. Settings may override
every value here; ComplianceDefaults carries the effective values into the
rule provider.
"""

# Role whose rules apply to drivers.
DEFAULT_ROLE = "driver"

# Required document types used when a tenant has no rules configured.
DEFAULT_REQUIRED_DOCS: tuple[str, ...] = ("Driver License", "Background Check")

# Days before expiry at which an alert is raised.
DEFAULT_ALERT_WINDOWS: tuple[int, ...] = (30, 15, 7)

DEFAULT_GRACE_DAYS = 0

# Prefix for synthetic ids of default (unpersisted) rules.
DEFAULT_RULE_ID_PREFIX = "default-"

# Number of entries in TenantEvaluation.top_issues.
TOP_ISSUES_LIMIT = 5

ALERT_CHANNEL_IN_APP = "in_app"

# Window recorded on "expired" alerts.
EXPIRED_ALERT_WINDOW_DAYS = 0

DEDUPE_KEY_SEP = ":"

# Audit log
AUDIT_RESOURCE_COMPLIANCE_ALERTS = "compliance_alerts"
AUDIT_ACTION_ALERTS_GENERATED = "alerts_generated"

# Pagination for listing drivers in tenant-wide jobs.
DRIVER_PAGE_SIZE = 500

# Cap on ids reported back in batch results.
MAX_ERROR_IDS = 50
