from datetime import datetime

import pytest

from src.hr_payroll.hr_payroll.common.datetime_utils import pay_period_range
from src.hr_payroll.hr_payroll.core.exceptions import InvalidInputError


def test_first_half_is_first_through_fifteenth():
    assert pay_period_range(2025, 1, 1) == (datetime(2025, 1, 1, 0, 0, 0), datetime(2025, 1, 15, 23, 59, 59))


def test_second_half_runs_to_month_end():
    assert pay_period_range(2025, 4, 2) == (datetime(2025, 4, 16, 0, 0, 0), datetime(2025, 4, 30, 23, 59, 59))


def test_leap_february():
    assert pay_period_range(2024, 2, 2)[1] == datetime(2024, 2, 29, 23, 59, 59)
    assert pay_period_range(2025, 2, 2)[1] == datetime(2025, 2, 28, 23, 59, 59)


@pytest.mark.parametrize("year, month, period", [(2025, 13, 1), (2025, 0, 1), (2025, 1, 3), (1800, 1, 1)])
def test_bad_period_arguments(year, month, period):
    with pytest.raises(InvalidInputError):
        pay_period_range(year, month, period)
