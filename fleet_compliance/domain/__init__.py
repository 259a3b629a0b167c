"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure. Used by application and infrastructure
layers.
"""

from fleet_compliance.domain.enums import (
    AlertType,
    DocumentStatus,
    ExpiringDocumentFilter,
    TenantStatus,
)
from fleet_compliance.domain.exceptions import (
    AlertReconciliationFailedException,
    ComplianceConfigurationException,
    ComplianceEngineException,
    EvaluationTimeoutException,
    ResourceNotFoundException,
    SnapshotCreationFailedException,
    SqlNotConfiguredException,
    StorageUnavailableException,
    ValidationException,
)
from fleet_compliance.domain.value_objects import AlertWindows, DocTypeKey

__all__ = [
    # Enums
    "AlertType",
    "DocumentStatus",
    "ExpiringDocumentFilter",
    "TenantStatus",
    # Exceptions
    "AlertReconciliationFailedException",
    "ComplianceConfigurationException",
    "ComplianceEngineException",
    "EvaluationTimeoutException",
    "ResourceNotFoundException",
    "SnapshotCreationFailedException",
    "SqlNotConfiguredException",
    "StorageUnavailableException",
    "ValidationException",
    # Value objects
    "AlertWindows",
    "DocTypeKey",
]
