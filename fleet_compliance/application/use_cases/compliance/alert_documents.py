"""Alert document use cases: candidates, badge counts, expiring listing."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from fleet_compliance.application.dtos.alert import (
    AlertCandidate,
    AlertCountResult,
    ExpiringDocumentItem,
    ExpiringDocumentsResult,
)
from fleet_compliance.application.services.alert_candidates import (
    derive_alert_candidates,
)
from fleet_compliance.domain.enums import (
    AlertType,
    DocumentStatus,
    ExpiringDocumentFilter,
)
from fleet_compliance.domain.exceptions import ValidationException
from fleet_compliance.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from fleet_compliance.application.use_cases.compliance.evaluate_tenant import (
        EvaluateTenantUseCase,
    )


class GetDocumentsForAlertsUseCase:
    """Returns the alert candidates for every active driver of a tenant."""

    def __init__(self, evaluate_tenant_use_case: "EvaluateTenantUseCase") -> None:
        self._evaluate_tenant = evaluate_tenant_use_case

    @traced("compliance.get_documents_for_alerts")
    async def execute(
        self,
        tenant_id: str,
        now: date | datetime | None = None,
    ) -> list[AlertCandidate]:
        """Required documents that are expired, or expiring within a window.

        Candidates come from a single batch evaluation of all active drivers.
        """
        batch = await self._evaluate_tenant.load(tenant_id, now=now)
        return derive_alert_candidates(batch.evaluations.values(), batch.rules)


class CountAlertCandidatesUseCase:
    """Counts current alert candidates by type (for a notification badge)."""

    def __init__(self, documents_for_alerts: GetDocumentsForAlertsUseCase) -> None:
        self._documents_for_alerts = documents_for_alerts

    async def execute(
        self,
        tenant_id: str,
        now: date | datetime | None = None,
    ) -> AlertCountResult:
        candidates = await self._documents_for_alerts.execute(tenant_id, now=now)
        expired = sum(1 for c in candidates if c.alert_type is AlertType.EXPIRED)
        return AlertCountResult(
            total=len(candidates),
            expired=expired,
            expiring=len(candidates) - expired,
        )


class ListExpiringDocumentsUseCase:
    """Lists required documents that are expired or expiring, with driver info.

    Counts are computed over the unfiltered set; items are filtered, then
    ordered expired first and by days until expiry ascending.
    """

    def __init__(self, evaluate_tenant_use_case: "EvaluateTenantUseCase") -> None:
        self._evaluate_tenant = evaluate_tenant_use_case

    @traced("compliance.list_expiring_documents")
    async def execute(
        self,
        tenant_id: str,
        status_filter: ExpiringDocumentFilter | str = ExpiringDocumentFilter.ALL,
        search: str | None = None,
        now: date | datetime | None = None,
    ) -> ExpiringDocumentsResult:
        """Return the listing.

        Args:
            tenant_id: Tenant id.
            status_filter: all, expired or expiring.
            search: Optional case-insensitive match on driver name or email.
            now: Reference instant (defaults to current UTC time).

        Raises:
            ValidationException: status_filter is not a known filter.
        """
        try:
            status_filter = ExpiringDocumentFilter(status_filter)
        except ValueError as e:
            raise ValidationException(
                f"Unknown status filter: {status_filter!r}", field="status_filter"
            ) from e
        search = search.strip() if search else None
        batch = await self._evaluate_tenant.load(
            tenant_id, now=now, search=search or None
        )

        items: list[ExpiringDocumentItem] = []
        for driver in batch.drivers:
            evaluation = batch.evaluations[driver.id]
            for doc in evaluation.required_documents:
                if doc.status not in (DocumentStatus.EXPIRED, DocumentStatus.EXPIRING):
                    continue
                if doc.doc_id is None or doc.days_until_expiry is None:
                    continue
                items.append(
                    ExpiringDocumentItem(
                        doc_id=doc.doc_id,
                        driver_id=driver.id,
                        driver_name=driver.display_name,
                        driver_email=driver.email,
                        doc_type=doc.doc_type,
                        expires_at=doc.expires_at,
                        days_until_expiry=doc.days_until_expiry,
                        status=doc.status,
                    )
                )

        expired = sum(1 for i in items if i.status is DocumentStatus.EXPIRED)
        if status_filter is ExpiringDocumentFilter.EXPIRED:
            selected = [i for i in items if i.status is DocumentStatus.EXPIRED]
        elif status_filter is ExpiringDocumentFilter.EXPIRING:
            selected = [i for i in items if i.status is DocumentStatus.EXPIRING]
        else:
            selected = items
        selected.sort(
            key=lambda i: (
                i.status is not DocumentStatus.EXPIRED,
                i.days_until_expiry,
                i.driver_id,
                i.doc_type,
            )
        )
        return ExpiringDocumentsResult(
            items=tuple(selected),
            total=len(items),
            expired=expired,
            expiring=len(items) - expired,
        )
