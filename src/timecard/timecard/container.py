from __future__ import annotations

from dataclasses import dataclass

from .approvals.service import ApprovalService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .payroll.calculator.base import PayrollCalculator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    approval_service: ApprovalService
    payroll_report_service: PayrollReportService


def build_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    calculator: PayrollCalculator | None = None,
) -> Container:
    calculator = calculator or StandardPayrollCalculator()
    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo, calculator=calculator),
        approval_service=ApprovalService(attendance_repo, users_repo),
        payroll_report_service=PayrollReportService(attendance_repo, users_repo, calculator=calculator),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
