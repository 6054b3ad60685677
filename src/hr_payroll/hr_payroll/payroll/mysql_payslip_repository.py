from __future__ import annotations

from typing import Any, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PaymentStatus, PayPeriod
from ..core.exceptions import ConcurrentUpdateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_column, fetchall, fetchone, load_json_column
from .model import Payslip
from .normalization import COMPONENT_ALIASES, normalize_components, normalize_deductions
from .repository import PayslipRepository

_COLUMNS = """
    payslip_id, employee_id, month, year, period, basic_salary,
    components, deductions, gross_pay, total_deductions, net_pay,
    payment_status, generated_at
"""


def _to_payslip(r: dict[str, Any]) -> Payslip:
    # Older rows carry legacy key names; normalization maps them once here.
    # They also kept basic pay only in the basic_salary column.
    components = load_json_column(r.get("components"))
    legacy_basic = None if any(k in components for k in COMPONENT_ALIASES["basic_pay"]) else int(r["basic_salary"])
    return Payslip(
        payslip_id=str(r["payslip_id"]),
        employee_id=str(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        period=PayPeriod(int(r.get("period") or 1)),
        basic_salary=int(r["basic_salary"]),
        components=normalize_components(components, basic_pay=legacy_basic),
        deductions=normalize_deductions(load_json_column(r.get("deductions"))),
        gross_pay=int(r["gross_pay"]),
        net_pay=int(r["net_pay"]),
        generated_at=r["generated_at"],
        payment_status=PaymentStatus(r.get("payment_status") or PaymentStatus.FINALIZED.value),
    )


def _row_params(p: Payslip) -> tuple:
    return (
        p.basic_salary,
        dump_json_column(p.components.to_dict()),
        dump_json_column(p.deductions.to_dict()),
        p.gross_pay,
        p.total_deductions,
        p.net_pay,
        p.payment_status.value,
        p.generated_at,
    )


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_key(self, *, employee_id: str, month: int, year: int, period: PayPeriod) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslips
                WHERE employee_id=%s AND month=%s AND year=%s AND period=%s
                """,
                (employee_id, int(month), int(year), int(period)),
            )
            r = fetchone(cur)
            return _to_payslip(r) if r else None

    def get_by_id(self, payslip_id: str) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payslips WHERE payslip_id=%s", (payslip_id,))
            r = fetchone(cur)
            return _to_payslip(r) if r else None

    def create(self, payslip: Payslip) -> Payslip:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payslips(
                        payslip_id, employee_id, month, year, period,
                        basic_salary, components, deductions, gross_pay, total_deductions, net_pay,
                        payment_status, generated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (payslip.payslip_id, payslip.employee_id, payslip.month, payslip.year, int(payslip.period))
                    + _row_params(payslip),
                )
        except mysql.connector.IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ConcurrentUpdateError(
                    f"A payslip already exists for {payslip.key!r}; another operation created it first"
                ) from e
            raise
        return payslip

    def update(self, payslip: Payslip) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payslips
                SET basic_salary=%s, components=%s, deductions=%s, gross_pay=%s,
                    total_deductions=%s, net_pay=%s, payment_status=%s, generated_at=%s
                WHERE payslip_id=%s
                """,
                _row_params(payslip) + (payslip.payslip_id,),
            )
            # rowcount is 0 for an identical rewrite unless CLIENT_FOUND_ROWS is set,
            # so confirm the row still exists instead of trusting it.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM payslips WHERE payslip_id=%s", (payslip.payslip_id,))
            return fetchone(cur) is not None

    def list_payslips(
        self,
        *,
        employee_id: Optional[str] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        period: Optional[PayPeriod] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Payslip]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)
        if month is not None:
            clauses.append("month=%s")
            params.append(int(month))
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))
        if period is not None:
            clauses.append("period=%s")
            params.append(int(period))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslips
                {where}
                ORDER BY generated_at DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_payslip(r) for r in fetchall(cur)]

    def delete_by_id(self, payslip_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payslips WHERE payslip_id=%s", (payslip_id,))
            return cur.rowcount > 0
