from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ...common.logging_config import get_logger
from ...common.validators import require_non_negative_minor, require_period
from ...core.enums import IncomeTaxPolicy, PayPeriod
from ...core.exceptions import InvalidInputError
from ..deductions.statutory import StatutoryDeductionCalculator
from ..model import DeductionSet
from ..settings import PayrollSettings
from .factory import ReconciliationStrategyFactory

logger = get_logger("payroll.reconciliation")


@dataclass(frozen=True)
class ReconciliationOutcome:
    period: PayPeriod
    basis: int
    due: DeductionSet
    computed_income_tax: int


class ReconciliationEngine:
    """Semi-monthly payout of deductions that are assessed on a monthly basis.

    Results depend only on the arguments; nothing is cached between calls.
    """

    def __init__(
        self,
        settings: Optional[PayrollSettings] = None,
        *,
        calculator: Optional[StatutoryDeductionCalculator] = None,
        strategy_factory: Optional[ReconciliationStrategyFactory] = None,
    ):
        self._settings = settings or PayrollSettings()
        self._calculator = calculator or StatutoryDeductionCalculator(self._settings)
        self._factory = strategy_factory or ReconciliationStrategyFactory()

    @property
    def income_tax_policy(self) -> IncomeTaxPolicy:
        return self._settings.income_tax_policy

    def reconcile_detailed(
        self,
        current_half_gross: int,
        period: int,
        prior_half_deductions: Optional[DeductionSet] = None,
        *,
        prior_half_gross: Optional[int] = None,
    ) -> ReconciliationOutcome:
        half = require_period(period)
        current = require_non_negative_minor(current_half_gross, "current half gross")
        if half == PayPeriod.SECOND_HALF and prior_half_deductions is not None and prior_half_gross is None:
            raise InvalidInputError("period 2 needs the prior half gross together with its deductions")
        prior = require_non_negative_minor(0 if prior_half_gross is None else prior_half_gross, "prior half gross")

        strategy = self._factory.for_period(half)
        due = strategy.reconcile(
            current_half_gross=current,
            prior_half_gross=prior,
            prior_half_deductions=prior_half_deductions,
            calculator=self._calculator,
        )
        computed_tax = due.income_tax
        if self.income_tax_policy == IncomeTaxPolicy.DEFER_AT_PAYOUT:
            due = replace(due, income_tax=0)

        basis = strategy.basis(current_half_gross=current, prior_half_gross=prior)
        logger.debug(
            "deductions_reconciled",
            extra={
                "period": int(half),
                "basis": basis,
                "income_tax_policy": self.income_tax_policy,
                "computed_income_tax": computed_tax,
                "total_due": due.total,
            },
        )
        return ReconciliationOutcome(period=half, basis=basis, due=due, computed_income_tax=computed_tax)

    def reconcile(
        self,
        current_half_gross: int,
        period: int,
        prior_half_deductions: Optional[DeductionSet] = None,
        *,
        prior_half_gross: Optional[int] = None,
    ) -> DeductionSet:
        return self.reconcile_detailed(
            current_half_gross, period, prior_half_deductions, prior_half_gross=prior_half_gross
        ).due


def reconcile(
    current_half_gross: int,
    period: int,
    prior_half_deductions: Optional[DeductionSet] = None,
    *,
    prior_half_gross: Optional[int] = None,
    settings: Optional[PayrollSettings] = None,
) -> DeductionSet:
    return ReconciliationEngine(settings).reconcile(
        current_half_gross, period, prior_half_deductions, prior_half_gross=prior_half_gross
    )
