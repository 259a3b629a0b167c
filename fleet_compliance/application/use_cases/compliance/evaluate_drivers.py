"""Evaluate drivers use cases: one driver, or many with batched reads."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import TYPE_CHECKING

from fleet_compliance.application.dtos.compliance_rule import ComplianceRuleResult
from fleet_compliance.application.dtos.driver import DriverDocumentResult
from fleet_compliance.application.dtos.evaluation import DriverEvaluation
from fleet_compliance.domain.exceptions import ResourceNotFoundException
from fleet_compliance.shared.telemetry.tracing import traced
from fleet_compliance.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from fleet_compliance.application.interfaces.repositories import (
        IDriverDocumentRepository,
        IDriverRepository,
    )
    from fleet_compliance.application.services.compliance_rule_provider import (
        ComplianceRuleProvider,
    )
    from fleet_compliance.application.services.driver_evaluator import (
        DriverEvaluator,
    )


class EvaluateDriversBatchUseCase:
    """Evaluates many drivers with one rule read and one document read.

    Rules are resolved once and shared by every driver in the batch, so a
    batch never mixes rule versions.
    """

    def __init__(
        self,
        rule_provider: "ComplianceRuleProvider",
        document_repo: "IDriverDocumentRepository",
        evaluator: "DriverEvaluator",
    ) -> None:
        self._rule_provider = rule_provider
        self._document_repo = document_repo
        self._evaluator = evaluator

    @traced("compliance.evaluate_drivers_batch")
    async def execute(
        self,
        tenant_id: str,
        driver_ids: Iterable[str],
        now: date | datetime | None = None,
    ) -> dict[str, DriverEvaluation]:
        """Return driver_id -> evaluation for every given driver.

        Duplicate ids are evaluated once; an empty input returns {} without
        touching storage. Drivers with no documents are still evaluated
        (every required type missing).

        Raises:
            ComplianceConfigurationException: Rules are malformed or absent.
        """
        _, evaluations = await self.evaluate_with_rules(tenant_id, driver_ids, now)
        return evaluations

    async def evaluate_with_rules(
        self,
        tenant_id: str,
        driver_ids: Iterable[str],
        now: date | datetime | None = None,
    ) -> tuple[list[ComplianceRuleResult], dict[str, DriverEvaluation]]:
        """Like execute, also returning the rules the batch was evaluated against."""
        unique_ids = list(dict.fromkeys(driver_ids))
        if not unique_ids:
            return [], {}
        now = now or utc_now()
        rules = await self._rule_provider.get_rules(tenant_id)
        documents = await self._document_repo.list_for_drivers(tenant_id, unique_ids)
        return rules, self.evaluate_loaded(unique_ids, documents, rules, now)

    def evaluate_loaded(
        self,
        driver_ids: Sequence[str],
        documents: Iterable[DriverDocumentResult],
        rules: Sequence[ComplianceRuleResult],
        now: date | datetime,
    ) -> dict[str, DriverEvaluation]:
        """Evaluate already-loaded documents; documents of other drivers are ignored."""
        by_driver: dict[str, list[DriverDocumentResult]] = defaultdict(list)
        for doc in documents:
            by_driver[doc.driver_id].append(doc)
        return {
            driver_id: self._evaluator.evaluate(
                driver_id, by_driver.get(driver_id, ()), rules, now
            )
            for driver_id in driver_ids
        }


class EvaluateDriverUseCase:
    """Evaluates one active driver.

    Delegates to the batch use case so a single evaluation always equals
    the same driver's entry in a batch evaluated at the same instant.
    """

    def __init__(
        self,
        driver_repo: "IDriverRepository",
        batch_use_case: EvaluateDriversBatchUseCase,
    ) -> None:
        self._driver_repo = driver_repo
        self._batch_use_case = batch_use_case

    @traced("compliance.evaluate_driver")
    async def execute(
        self,
        tenant_id: str,
        driver_id: str,
        now: date | datetime | None = None,
    ) -> DriverEvaluation:
        """Return the driver's evaluation.

        Raises:
            ResourceNotFoundException: Driver does not exist in tenant or is deleted.
            ComplianceConfigurationException: Rules are malformed or absent.
        """
        driver = await self._driver_repo.get_active_by_id(tenant_id, driver_id)
        if driver is None:
            raise ResourceNotFoundException("driver", driver_id)
        evaluations = await self._batch_use_case.execute(
            tenant_id, [driver_id], now=now
        )
        return evaluations[driver_id]
