from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class MonthlySummary:
    """Totals over the approved records of one employee and month."""

    user_id: int
    year: int
    month: int
    total_work_min: int
    total_overtime_min: int
    total_night_min: int
    total_days_worked: int
    estimated_salary: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EmployeeMonthRow:
    """One line of the admin dashboard (all records of the month, any status)."""

    user_id: int
    employee_id: str
    name: str
    total_work_min: int
    total_overtime_min: int
    total_days_worked: int
    pending_count: int
    approved_count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DashboardData:
    rows: list[EmployeeMonthRow]
    total_records: int
