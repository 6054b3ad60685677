from datetime import datetime

import pytest

from src.hr_payroll.hr_payroll.core.enums import PaymentStatus, PayPeriod
from src.hr_payroll.hr_payroll.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.hr_payroll.hr_payroll.database.mysql_base import dump_json_column, load_json_column
from src.hr_payroll.hr_payroll.payroll.model import DeductionSet, PayComponents
from src.hr_payroll.hr_payroll.payroll.mysql_payslip_repository import _to_payslip


def _row(**overrides):
    row = {
        "payslip_id": "p1",
        "employee_id": 7,
        "month": 1,
        "year": 2025,
        "period": 2,
        "basic_salary": 470_000,
        "components": '{"basic_pay": 480000, "overtime_pay": 0, "night_diff_pay": 0, "bonus": 0, "other_allowances": 0}',
        "deductions": b'{"social_insurance": 1, "health_insurance": 2, "housing_fund": 3, "income_tax": 4, "other": 5}',
        "gross_pay": 480_000,
        "total_deductions": 15,
        "net_pay": 479_985,
        "payment_status": "paid",
        "generated_at": datetime(2025, 1, 31, 18, 0),
    }
    row.update(overrides)
    return row


def test_row_maps_to_payslip():
    p = _to_payslip(_row())

    assert p.employee_id == "7"
    assert p.period == PayPeriod.SECOND_HALF
    assert p.basic_salary == 470_000
    assert p.components.basic_pay == 480_000
    assert p.deductions == DeductionSet(1, 2, 3, 4, 5)
    assert p.payment_status == PaymentStatus.PAID


def test_legacy_row_is_normalized():
    p = _to_payslip(
        _row(
            period=None,
            payment_status=None,
            components='{"overtime": 2423, "nightDiff": 588, "allowances": 0, "bonuses": 0}',
            deductions={"tax": 0, "sss": 100, "philHealth": 50, "pagIbig": 20, "others": 0},
        )
    )

    assert p.period == PayPeriod.FIRST_HALF
    assert p.payment_status == PaymentStatus.FINALIZED
    assert p.components == PayComponents(basic_pay=470_000, overtime_pay=2423, night_diff_pay=588)
    assert p.deductions == DeductionSet(social_insurance=100, health_insurance=50, housing_fund=20)


@pytest.mark.parametrize("value, expected", [(None, {}), ("", {}), ('{"a": 1}', {"a": 1}), (b'{"a": 1}', {"a": 1}), ({"a": 1}, {"a": 1})])
def test_load_json_column(value, expected):
    assert load_json_column(value) == expected


def test_load_json_column_rejects_arrays():
    with pytest.raises(ValueError):
        load_json_column("[1, 2]")


def test_dump_json_column_is_stable():
    assert dump_json_column({"b": 1, "a": 2}) == '{"a": 2, "b": 1}'


def test_sql_splitter_keeps_semicolons_in_quotes():
    sql = "CREATE TABLE a (x VARCHAR(5) DEFAULT ';');\nINSERT INTO a VALUES ('x;y');\n"

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x VARCHAR(5) DEFAULT ';')",
        "INSERT INTO a VALUES ('x;y')",
    ]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS hr_payroll;\nUSE hr_payroll;\nCREATE TABLE t (id INT);\n"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]
