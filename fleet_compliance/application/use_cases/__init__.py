"""Application use cases: one entry point per workflow."""

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
