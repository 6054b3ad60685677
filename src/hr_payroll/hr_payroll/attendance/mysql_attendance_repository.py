from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: str, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, time_in, time_out,
                       total_break_minutes, total_work_minutes
                FROM attendance_records
                WHERE employee_id=%s AND time_in BETWEEN %s AND %s
                ORDER BY time_in ASC
                """,
                (employee_id, start, end),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    attendance_id=str(r["attendance_id"]),
                    employee_id=str(r["employee_id"]),
                    work_date=r["work_date"],
                    clock_in=r["time_in"],
                    clock_out=r.get("time_out"),
                    break_minutes=int(r.get("total_break_minutes") or 0),
                    total_work_minutes=(
                        int(r["total_work_minutes"]) if r.get("total_work_minutes") is not None else None
                    ),
                )
                for r in rows
            ]
