"""Core: config and constants.

Single place for settings and shared constants.
"""

from fleet_compliance.core.config import ComplianceDefaults, Settings, get_settings

__all__ = ["ComplianceDefaults", "Settings", "get_settings"]
