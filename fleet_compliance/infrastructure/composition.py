"""Composition root: builds the compliance use cases on one tenant session.

All use cases are built from infrastructure implementations here; callers
(job scripts, the sweep service, a host application) depend only on the
ComplianceUseCases bundle, not on repositories directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_compliance.application.interfaces.repositories import (
    IAuditLogRepository,
    IComplianceAlertRepository,
    IComplianceRuleRepository,
    IComplianceSnapshotRepository,
    IDriverDocumentRepository,
    IDriverRepository,
)
from fleet_compliance.application.services.compliance_rule_provider import (
    ComplianceRuleProvider,
)
from fleet_compliance.application.services.driver_evaluator import DriverEvaluator
from fleet_compliance.application.use_cases.compliance import (
    BuildComplianceReportUseCase,
    ComplianceRuleService,
    CountAlertCandidatesUseCase,
    CreateComplianceSnapshotUseCase,
    EvaluateDriversBatchUseCase,
    EvaluateDriverUseCase,
    EvaluateTenantUseCase,
    GetDocumentsForAlertsUseCase,
    InitializeComplianceUseCase,
    ListExpiringDocumentsUseCase,
    ReconcileAlertsUseCase,
)
from fleet_compliance.core.config import ComplianceDefaults, Settings, get_settings
from fleet_compliance.infrastructure.persistence.repositories import (
    AuditLogRepository,
    ComplianceAlertRepository,
    ComplianceRuleRepository,
    ComplianceSnapshotRepository,
    DriverDocumentRepository,
    DriverRepository,
)


@dataclass(frozen=True)
class ComplianceUseCases:
    """Every compliance entry point, sharing one session and one rule provider."""

    rule_provider: ComplianceRuleProvider
    rules: ComplianceRuleService
    evaluate_driver: EvaluateDriverUseCase
    evaluate_drivers_batch: EvaluateDriversBatchUseCase
    evaluate_tenant: EvaluateTenantUseCase
    documents_for_alerts: GetDocumentsForAlertsUseCase
    count_alerts: CountAlertCandidatesUseCase
    list_expiring_documents: ListExpiringDocumentsUseCase
    reconcile_alerts: ReconcileAlertsUseCase
    create_snapshot: CreateComplianceSnapshotUseCase
    build_report: BuildComplianceReportUseCase
    initialize: InitializeComplianceUseCase


def build_compliance_use_cases(
    session: AsyncSession,
    settings: Settings | None = None,
) -> ComplianceUseCases:
    """Wire SQLAlchemy repositories and use cases for one session (one tenant transaction)."""
    return wire_compliance_use_cases(
        rule_repo=ComplianceRuleRepository(session),
        driver_repo=DriverRepository(session),
        document_repo=DriverDocumentRepository(session),
        alert_repo=ComplianceAlertRepository(session),
        snapshot_repo=ComplianceSnapshotRepository(session),
        audit_repo=AuditLogRepository(session),
        settings=settings,
    )


def wire_compliance_use_cases(
    *,
    rule_repo: IComplianceRuleRepository,
    driver_repo: IDriverRepository,
    document_repo: IDriverDocumentRepository,
    alert_repo: IComplianceAlertRepository,
    snapshot_repo: IComplianceSnapshotRepository,
    audit_repo: IAuditLogRepository | None,
    settings: Settings | None = None,
) -> ComplianceUseCases:
    """Wire use cases on any implementation of the repository ports."""
    settings = settings or get_settings()
    defaults = ComplianceDefaults.from_settings(settings)

    rule_provider = ComplianceRuleProvider(rule_repo, defaults)
    evaluator = DriverEvaluator(
        default_alert_windows=defaults.alert_windows,
        default_grace_days=defaults.grace_days,
    )
    batch = EvaluateDriversBatchUseCase(rule_provider, document_repo, evaluator)
    evaluate_driver = EvaluateDriverUseCase(driver_repo, batch)
    evaluate_tenant = EvaluateTenantUseCase(
        driver_repo,
        batch,
        top_issues_limit=settings.compliance_top_issues_limit,
        page_size=settings.compliance_driver_page_size,
    )
    documents_for_alerts = GetDocumentsForAlertsUseCase(evaluate_tenant)
    rules = ComplianceRuleService(rule_repo, rule_provider)
    reconcile_alerts = ReconcileAlertsUseCase(
        documents_for_alerts,
        alert_repo,
        audit_repo,
        channel=settings.compliance_alert_channel,
    )
    create_snapshot = CreateComplianceSnapshotUseCase(
        evaluate_driver, evaluate_tenant, snapshot_repo
    )
    return ComplianceUseCases(
        rule_provider=rule_provider,
        rules=rules,
        evaluate_driver=evaluate_driver,
        evaluate_drivers_batch=batch,
        evaluate_tenant=evaluate_tenant,
        documents_for_alerts=documents_for_alerts,
        count_alerts=CountAlertCandidatesUseCase(documents_for_alerts),
        list_expiring_documents=ListExpiringDocumentsUseCase(evaluate_tenant),
        reconcile_alerts=reconcile_alerts,
        create_snapshot=create_snapshot,
        build_report=BuildComplianceReportUseCase(evaluate_tenant),
        initialize=InitializeComplianceUseCase(
            rules, reconcile_alerts, create_snapshot
        ),
    )
