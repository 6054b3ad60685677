import pytest

from src.hr_payroll.hr_payroll.common.validators import require_month, require_period, require_year
from src.hr_payroll.hr_payroll.core.enums import PayPeriod, Role
from src.hr_payroll.hr_payroll.core.exceptions import InvalidInputError


@pytest.mark.parametrize("value, expected", [(1, PayPeriod.FIRST_HALF), (2.0, PayPeriod.SECOND_HALF), ("2", PayPeriod.SECOND_HALF)])
def test_period_accepts_whole_numbers(value, expected):
    assert require_period(value) == expected


@pytest.mark.parametrize("value", [2.5, 1.9, True, False, "1.5", "", None, [1]])
def test_period_is_never_truncated(value):
    with pytest.raises(InvalidInputError):
        require_period(value)


@pytest.mark.parametrize("value", [12.7, True, "12a", 0, 13])
def test_bad_month(value):
    with pytest.raises(InvalidInputError):
        require_month(value)


def test_month_and_year_accept_digit_strings():
    assert require_month("07") == 7
    assert require_year("2025") == 2025


@pytest.mark.parametrize("value", [2025.5, True, "20x5"])
def test_bad_year(value):
    with pytest.raises(InvalidInputError):
        require_year(value)


def test_roles_are_the_ones_payroll_acts_on():
    assert {r.value for r in Role} == {"admin", "payroll_officer", "employee"}
