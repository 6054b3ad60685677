from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.exceptions import InvalidInputError
from src.hr_payroll.hr_payroll.payroll.deductions.statutory import StatutoryDeductionCalculator, compute_deductions
from src.hr_payroll.hr_payroll.payroll.deductions.tax_table import DEFAULT_TAX_TABLE, TaxBracket, TaxTable
from src.hr_payroll.hr_payroll.payroll.model import DeductionSet
from src.hr_payroll.hr_payroll.payroll.settings import PayrollSettings


def test_deductions_for_half_month_gross():
    d = compute_deductions(1_000_000)

    assert d == DeductionSet(social_insurance=45_000, health_insurance=25_000, housing_fund=10_000, income_tax=0)


def test_deductions_for_whole_month_gross():
    d = compute_deductions(2_200_000)

    assert d.social_insurance == 99_000
    assert d.health_insurance == 55_000
    assert d.housing_fund == 10_000
    # (22,000 - 20,833) * 15%
    assert d.income_tax == 17_505


def test_housing_fund_below_ceiling():
    assert compute_deductions(300_000).housing_fund == 6_000


def test_zero_gross_gives_zero_deductions():
    assert compute_deductions(0) == DeductionSet()


def test_fractional_minor_units_round_half_up():
    calc = StatutoryDeductionCalculator()

    assert calc.social_insurance(100) == 5  # 4.5
    assert calc.health_insurance(20) == 1  # 0.5
    assert calc.health_insurance(10) == 0  # 0.25


def test_negative_gross_is_rejected():
    with pytest.raises(InvalidInputError):
        compute_deductions(-1)


def test_missing_gross_is_rejected():
    with pytest.raises(InvalidInputError):
        compute_deductions(None)


def test_tax_is_marginal_across_brackets():
    # 12,499 * 15% + 6,668 * 20%
    assert DEFAULT_TAX_TABLE.compute(4_000_000) == 187_485 + 133_360


def test_tax_at_a_bracket_bound_is_zero_for_that_bracket():
    assert DEFAULT_TAX_TABLE.compute(2_083_300) == 0


def test_tax_is_monotonic():
    amounts = [0, 1_000_000, 2_083_300, 3_000_000, 7_000_000, 20_000_000, 90_000_000]
    taxes = [DEFAULT_TAX_TABLE.compute(a) for a in amounts]

    assert taxes == sorted(taxes)


def test_tax_table_from_settings_replaces_schedule():
    settings = PayrollSettings.from_mapping(
        {"TAX_BRACKETS": [("0", "0"), ("1000", "0.10"), ("2000", "0.20"), ("3000", "0.30")]}
    )

    # 1,000 * 10% + 500 * 20%
    assert compute_deductions(250_000, settings).income_tax == 20_000


@pytest.mark.parametrize(
    "brackets",
    [
        [TaxBracket(0, Decimal("0")), TaxBracket(100, Decimal("0.1")), TaxBracket(200, Decimal("0.2"))],
        [
            TaxBracket(10, Decimal("0")),
            TaxBracket(100, Decimal("0.1")),
            TaxBracket(200, Decimal("0.2")),
            TaxBracket(300, Decimal("0.3")),
        ],
        [
            TaxBracket(0, Decimal("0")),
            TaxBracket(200, Decimal("0.1")),
            TaxBracket(200, Decimal("0.2")),
            TaxBracket(300, Decimal("0.3")),
        ],
        [
            TaxBracket(0, Decimal("0")),
            TaxBracket(100, Decimal("0.1")),
            TaxBracket(200, Decimal("0.2")),
            TaxBracket(300, Decimal("1.5")),
        ],
    ],
)
def test_malformed_tax_table_is_rejected(brackets):
    with pytest.raises(InvalidInputError):
        TaxTable(brackets)


def test_housing_fund_ceiling_from_settings():
    settings = PayrollSettings.from_mapping({"HOUSING_FUND_CEILING": "50"})

    assert compute_deductions(1_000_000, settings).housing_fund == 5_000
