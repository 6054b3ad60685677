from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .payroll.assembler import PayslipAssembler
from .payroll.locking import KeyedLockRegistry
from .payroll.mysql_payslip_repository import MySQLPayslipRepository
from .payroll.reconciliation.engine import ReconciliationEngine
from .payroll.service import PayrollService
from .payroll.settings import PayrollSettings


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    settings: PayrollSettings

    attendance_repo: MySQLAttendanceRepository
    employees_repo: MySQLEmployeeRepository
    payslips_repo: MySQLPayslipRepository

    payroll_service: PayrollService


def build_container(*, db_config: Mapping[str, Any], payroll_config: Optional[Mapping[str, Any]] = None) -> Container:
    settings = PayrollSettings.from_mapping(payroll_config)
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    payslips_repo = MySQLPayslipRepository(conn)

    payroll_service = PayrollService(
        attendance_repo,
        employees_repo,
        payslips_repo,
        settings=settings,
        reconciliation=ReconciliationEngine(settings),
        assembler=PayslipAssembler(
            payslips_repo,
            settings=settings,
            locks=KeyedLockRegistry(timeout_seconds=settings.lock_timeout_seconds),
        ),
    )

    return Container(
        conn=conn,
        settings=settings,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        payslips_repo=payslips_repo,
        payroll_service=payroll_service,
    )
