"""Reconcile alerts use case: record each new alert condition exactly once."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING

from fleet_compliance.application.dtos.alert import (
    AlertReconcileResult,
    ComplianceAlertCreate,
)
from fleet_compliance.application.dtos.audit_log import AuditLogEntryCreate
from fleet_compliance.core.constants import (
    ALERT_CHANNEL_IN_APP,
    AUDIT_ACTION_ALERTS_GENERATED,
    AUDIT_RESOURCE_COMPLIANCE_ALERTS,
    MAX_ERROR_IDS,
)
from fleet_compliance.domain.exceptions import (
    AlertReconciliationFailedException,
    StorageUnavailableException,
)
from fleet_compliance.shared.telemetry.tracing import add_span_attributes, traced
from fleet_compliance.shared.utils.datetime import to_utc_datetime, utc_now

if TYPE_CHECKING:
    from fleet_compliance.application.interfaces.repositories import (
        IAuditLogRepository,
        IComplianceAlertRepository,
    )
    from fleet_compliance.application.use_cases.compliance.alert_documents import (
        GetDocumentsForAlertsUseCase,
    )

logger = logging.getLogger(__name__)


class ReconcileAlertsUseCase:
    """Appends an alert row for every candidate whose dedupe key is new.

    Existing keys are read in one query. Each insert runs in its own
    savepoint (in the repository), so one failed insert is logged and
    counted while the rest of the batch continues. Lost connectivity is
    not a per-row failure and propagates as StorageUnavailableException.
    """

    def __init__(
        self,
        documents_for_alerts: "GetDocumentsForAlertsUseCase",
        alert_repo: "IComplianceAlertRepository",
        audit_repo: "IAuditLogRepository | None" = None,
        channel: str = ALERT_CHANNEL_IN_APP,
    ) -> None:
        self._documents_for_alerts = documents_for_alerts
        self._alert_repo = alert_repo
        self._audit_repo = audit_repo
        self._channel = channel

    @traced("compliance.reconcile_alerts")
    async def execute(
        self,
        tenant_id: str,
        now: date | datetime | None = None,
        user_id: str | None = None,
    ) -> AlertReconcileResult:
        """Run one reconcile pass for the tenant.

        Args:
            tenant_id: Tenant id.
            now: Reference instant for classification (defaults to now).
            user_id: Actor recorded in the audit entry (None for jobs).

        Returns:
            AlertReconcileResult with sent, skipped and errors counts.

        Raises:
            ComplianceConfigurationException: Rules are malformed (nothing written).
            AlertReconciliationFailedException: Every attempted insert failed.
            StorageUnavailableException: Storage could not be reached.
        """
        now = now or utc_now()
        candidates = await self._documents_for_alerts.execute(tenant_id, now=now)
        if not candidates:
            return AlertReconcileResult(tenant_id=tenant_id, sent=0, skipped=0, errors=0)

        recorded = set(
            await self._alert_repo.get_existing_dedupe_keys(
                tenant_id, [c.dedupe_key for c in candidates]
            )
        )
        sent = 0
        skipped = 0
        errors = 0
        error_keys: list[str] = []

        for candidate in candidates:
            if candidate.dedupe_key in recorded:
                skipped += 1
                continue
            try:
                await self._alert_repo.create_alert(
                    ComplianceAlertCreate(
                        tenant_id=tenant_id,
                        driver_id=candidate.driver_id,
                        doc_id=candidate.doc_id,
                        alert_type=candidate.alert_type,
                        alert_window_days=candidate.alert_window_days,
                        channel=self._channel,
                        dedupe_key=candidate.dedupe_key,
                        sent_at=utc_now(),
                    )
                )
            except StorageUnavailableException:
                raise
            except Exception:
                logger.exception(
                    "Failed to record compliance alert %s for tenant %s",
                    candidate.dedupe_key,
                    tenant_id,
                )
                errors += 1
                if len(error_keys) < MAX_ERROR_IDS:
                    error_keys.append(candidate.dedupe_key)
            else:
                sent += 1
                recorded.add(candidate.dedupe_key)

        add_span_attributes(alerts_sent=sent, alerts_skipped=skipped, alert_errors=errors)
        if errors and sent == 0:
            raise AlertReconciliationFailedException(tenant_id, errors)

        result = AlertReconcileResult(
            tenant_id=tenant_id,
            sent=sent,
            skipped=skipped,
            errors=errors,
            error_dedupe_keys=tuple(error_keys),
        )
        logger.info(
            "Compliance alerts for tenant %s: %d sent, %d skipped, %d errors",
            tenant_id,
            sent,
            skipped,
            errors,
        )
        await self._record_audit(result, now, user_id)
        return result

    async def _record_audit(
        self,
        result: AlertReconcileResult,
        now: date | datetime,
        user_id: str | None,
    ) -> None:
        """One summary entry per run; a failed audit write does not undo alerts."""
        if self._audit_repo is None:
            return
        try:
            await self._audit_repo.create_entry(
                AuditLogEntryCreate(
                    tenant_id=result.tenant_id,
                    user_id=user_id,
                    action=AUDIT_ACTION_ALERTS_GENERATED,
                    resource_type=AUDIT_RESOURCE_COMPLIANCE_ALERTS,
                    resource_id=None,
                    new_values={
                        "candidates": result.candidates,
                        "sent": result.sent,
                        "skipped": result.skipped,
                        "errors": result.errors,
                        "evaluated_at": to_utc_datetime(now).isoformat(),
                    },
                )
            )
        except StorageUnavailableException:
            raise
        except Exception:
            logger.exception(
                "Failed to write alerts audit entry for tenant %s", result.tenant_id
            )
