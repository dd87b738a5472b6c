from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.service import STATUS_LABELS
from ..common.datetime_utils import YearMonth, format_hhmm
from ..core.enums import RecordStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import SessionUser, require_admin
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import DashboardData, EmployeeMonthRow, MonthlySummary
from .time_calculation import format_minutes, total_break_minutes

EXPORT_FIELDS = [
    "date",
    "employee_id",
    "name",
    "clock_in",
    "clock_out",
    "break_time",
    "work_time",
    "overtime",
    "night_time",
    "work_content",
    "note",
    "status",
]


class PayrollReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._calculator = calculator or StandardPayrollCalculator()

    def _get_employee(self, current: SessionUser, user_id: int) -> User:
        if not current.is_admin and current.user_id != int(user_id):
            raise AuthorizationError("You can only view your own report")
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Employee does not exist")
        return user

    def _month_records(self, user_id: int, month: YearMonth) -> Sequence[AttendanceRecord]:
        rows = self._attendance.list_for_user_between(user_id, start_date=month.first_day, end_date=month.last_day)
        return sorted(rows, key=lambda r: r.work_date)

    def summarize(self, user: User, records: Sequence[AttendanceRecord], month: YearMonth) -> MonthlySummary:
        approved = [r for r in records if r.status == RecordStatus.APPROVED and month.contains(r.work_date)]

        total_work = sum(r.computed_work_min for r in approved)
        total_overtime = sum(r.computed_overtime_min for r in approved)
        total_night = sum(r.computed_night_min for r in approved)

        return MonthlySummary(
            user_id=user.user_id,
            year=month.year,
            month=month.month,
            total_work_min=total_work,
            total_overtime_min=total_overtime,
            total_night_min=total_night,
            total_days_worked=len(approved),
            estimated_salary=self._calculator.estimate_salary(
                work_minutes=total_work,
                overtime_minutes=total_overtime,
                night_minutes=total_night,
                hourly_wage=user.hourly_wage,
            ),
        )

    def monthly_summary(self, current: SessionUser, user_id: int, month: YearMonth) -> MonthlySummary:
        user = self._get_employee(current, user_id)
        return self.summarize(user, self._month_records(user.user_id, month), month)

    def admin_dashboard(self, current: SessionUser, month: YearMonth) -> DashboardData:
        require_admin(current)

        records = self._attendance.list_between(start_date=month.first_day, end_date=month.last_day)
        by_user: dict[int, list[AttendanceRecord]] = {}
        for r in records:
            by_user.setdefault(r.user_id, []).append(r)

        rows = []
        for user in self._users.list_all():
            if user.role != Role.USER:
                continue
            mine = by_user.get(user.user_id, [])
            approved = sum(1 for r in mine if r.status == RecordStatus.APPROVED)
            rows.append(
                EmployeeMonthRow(
                    user_id=user.user_id,
                    employee_id=user.employee_id,
                    name=user.name,
                    total_work_min=sum(r.computed_work_min for r in mine),
                    total_overtime_min=sum(r.computed_overtime_min for r in mine),
                    total_days_worked=approved,
                    pending_count=sum(1 for r in mine if r.status == RecordStatus.PENDING),
                    approved_count=approved,
                )
            )

        return DashboardData(rows=rows, total_records=len(records))

    def export_rows(self, current: SessionUser, user_id: int, month: YearMonth) -> tuple[User, list[dict]]:
        """CSV rows for one employee and month, keyed by ``EXPORT_FIELDS``."""
        user = self._get_employee(current, user_id)

        out: list[dict] = []
        for r in self._month_records(user.user_id, month):
            first = r.work_spans[0] if r.work_spans else None
            last = r.work_spans[-1] if r.work_spans else None
            out.append(
                {
                    "date": r.work_date.strftime("%Y-%m-%d"),
                    "employee_id": user.employee_id,
                    "name": user.name,
                    "clock_in": format_hhmm(first.start_minute) if first else "",
                    "clock_out": format_hhmm(last.end_minute) if last else "",
                    "break_time": format_minutes(total_break_minutes(r.breaks)),
                    "work_time": format_minutes(r.computed_work_min),
                    "overtime": format_minutes(r.computed_overtime_min),
                    "night_time": format_minutes(r.computed_night_min),
                    "work_content": r.work_content,
                    "note": r.note,
                    "status": STATUS_LABELS.get(r.status, r.status.value),
                }
            )
        return user, out
