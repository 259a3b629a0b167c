"""Domain exceptions for the compliance engine.

Defines the typed errors the engine returns instead of partial results.
Callers map them to their own responses (HTTP status, retry, alerting).
"""

from typing import Any


class ComplianceEngineException(Exception):
    """Base exception for all compliance engine errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. tenant_id, counts).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(ComplianceEngineException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ComplianceConfigurationException(ComplianceEngineException):
    """Raised when the rule set cannot be used (malformed windows, no rules).

    Always raised before the operation writes anything.
    """

    def __init__(
        self,
        message: str,
        tenant_id: str | None = None,
        doc_type: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if tenant_id:
            details["tenant_id"] = tenant_id
        if doc_type:
            details["doc_type"] = doc_type
        super().__init__(message, "COMPLIANCE_CONFIGURATION_ERROR", details)


class ResourceNotFoundException(ComplianceEngineException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'driver', 'compliance_rule').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StorageUnavailableException(ComplianceEngineException):
    """Raised when the database cannot be reached or the connection drops.

    Distinct from data errors so callers can retry with backoff; the engine
    itself never retries.
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Storage unavailable during {operation}",
            "STORAGE_UNAVAILABLE",
            {"operation": operation, "reason": reason},
        )


class EvaluationTimeoutException(ComplianceEngineException):
    """Raised when an operation exceeds its wall-clock budget (result unknown)."""

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        super().__init__(
            f"{operation} timed out after {timeout_seconds} seconds",
            "EVALUATION_TIMEOUT",
            {"operation": operation, "timeout_seconds": timeout_seconds},
        )


class AlertReconciliationFailedException(ComplianceEngineException):
    """Raised when every alert insert of a reconcile run failed."""

    def __init__(self, tenant_id: str, attempted: int) -> None:
        super().__init__(
            f"All {attempted} alert inserts failed for tenant {tenant_id}",
            "ALERT_RECONCILIATION_FAILED",
            {"tenant_id": tenant_id, "attempted": attempted},
        )


class SnapshotCreationFailedException(ComplianceEngineException):
    """Raised when every snapshot insert of a batch failed."""

    def __init__(self, tenant_id: str, attempted: int) -> None:
        super().__init__(
            f"All {attempted} snapshot inserts failed for tenant {tenant_id}",
            "SNAPSHOT_CREATION_FAILED",
            {"tenant_id": tenant_id, "attempted": attempted},
        )


class SqlNotConfiguredException(ComplianceEngineException):
    """Raised when a database session is requested but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
