"""Compliance use cases: evaluation, alerts, snapshots, rule configuration."""

from fleet_compliance.application.use_cases.compliance.alert_documents import (
    CountAlertCandidatesUseCase,
    GetDocumentsForAlertsUseCase,
    ListExpiringDocumentsUseCase,
)
from fleet_compliance.application.use_cases.compliance.compliance_report import (
    BuildComplianceReportUseCase,
)
from fleet_compliance.application.use_cases.compliance.create_snapshot import (
    CreateComplianceSnapshotUseCase,
)
from fleet_compliance.application.use_cases.compliance.evaluate_drivers import (
    EvaluateDriverUseCase,
    EvaluateDriversBatchUseCase,
)
from fleet_compliance.application.use_cases.compliance.evaluate_tenant import (
    EvaluateTenantUseCase,
)
from fleet_compliance.application.use_cases.compliance.initialize_compliance import (
    InitializeComplianceUseCase,
)
from fleet_compliance.application.use_cases.compliance.manage_rules import (
    ComplianceRuleService,
)
from fleet_compliance.application.use_cases.compliance.reconcile_alerts import (
    ReconcileAlertsUseCase,
)

__all__ = [
    "BuildComplianceReportUseCase",
    "ComplianceRuleService",
    "CountAlertCandidatesUseCase",
    "CreateComplianceSnapshotUseCase",
    "EvaluateDriverUseCase",
    "EvaluateDriversBatchUseCase",
    "EvaluateTenantUseCase",
    "GetDocumentsForAlertsUseCase",
    "InitializeComplianceUseCase",
    "ListExpiringDocumentsUseCase",
    "ReconcileAlertsUseCase",
]
