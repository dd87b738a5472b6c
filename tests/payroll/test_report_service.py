from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.timecard.timecard.attendance.model import AttendanceRecord, BreakInterval, WorkSpan
from src.timecard.timecard.common.datetime_utils import YearMonth
from src.timecard.timecard.core.enums import RecordStatus
from src.timecard.timecard.core.exceptions import AuthorizationError, NotFoundError

FEB = YearMonth(2026, 2)


def _record(rid, user_id, day, status, work=480, overtime=0, night=0, **kwargs):
    return AttendanceRecord(
        record_id=rid,
        user_id=user_id,
        work_date=day,
        work_spans=(WorkSpan(540, 1080),),
        breaks=(BreakInterval(720, 780),),
        status=status,
        computed_work_min=work,
        computed_overtime_min=overtime,
        computed_night_min=night,
        **kwargs,
    )


@pytest.fixture
def records(attendance_repo):
    rows = [
        _record(1, 2, date(2026, 2, 2), RecordStatus.APPROVED, work=540, overtime=60, night=60),
        _record(2, 2, date(2026, 2, 3), RecordStatus.APPROVED),
        _record(3, 2, date(2026, 2, 4), RecordStatus.PENDING, work=300),
        _record(4, 2, date(2026, 1, 30), RecordStatus.APPROVED),
        _record(5, 3, date(2026, 2, 5), RecordStatus.DRAFT, work=240),
    ]
    for r in rows:
        attendance_repo.records[r.record_id] = r
    return rows


def test_monthly_summary_counts_only_approved(container, yamada, records):
    summary = container.payroll_report_service.monthly_summary(yamada, yamada.user_id, FEB)

    assert (summary.year, summary.month) == (2026, 2)
    assert summary.total_work_min == 1020
    assert summary.total_overtime_min == 60
    assert summary.total_night_min == 60
    assert summary.total_days_worked == 2
    # 1020/60*1500 + 60/60*1500*0.25 + 60/60*1500*0.25
    assert summary.estimated_salary == 26250


def test_monthly_summary_empty_month(container, sato, records):
    summary = container.payroll_report_service.monthly_summary(sato, sato.user_id, YearMonth(2026, 3))
    assert summary.total_work_min == 0
    assert summary.estimated_salary == 0


def test_employee_cannot_see_other_summary(container, sato, records):
    with pytest.raises(AuthorizationError):
        container.payroll_report_service.monthly_summary(sato, 2, FEB)


def test_admin_summary_for_missing_employee(container, admin):
    with pytest.raises(NotFoundError):
        container.payroll_report_service.monthly_summary(admin, 99, FEB)


def test_admin_dashboard(container, admin, records):
    data = container.payroll_report_service.admin_dashboard(admin, FEB)

    assert data.total_records == 4
    by_emp = {r.employee_id: r for r in data.rows}
    assert set(by_emp) == {"EMP001", "EMP002"}

    yamada = by_emp["EMP001"]
    assert yamada.total_work_min == 1320
    assert yamada.total_overtime_min == 60
    assert (yamada.total_days_worked, yamada.pending_count, yamada.approved_count) == (2, 1, 2)

    sato = by_emp["EMP002"]
    assert (sato.total_work_min, sato.approved_count, sato.pending_count) == (240, 0, 0)


def test_dashboard_requires_admin(container, yamada):
    with pytest.raises(AuthorizationError):
        container.payroll_report_service.admin_dashboard(yamada, FEB)


def test_export_rows(container, admin, attendance_repo, records):
    attendance_repo.records[2] = replace(
        records[1],
        work_spans=(WorkSpan(540, 720), WorkSpan(780, 1110)),
        note="client visit",
        work_content="setup",
    )

    user, rows = container.payroll_report_service.export_rows(admin, 2, FEB)

    assert user.employee_id == "EMP001"
    assert [r["date"] for r in rows] == ["2026-02-02", "2026-02-03", "2026-02-04"]
    second = rows[1]
    assert second["clock_in"] == "09:00"
    assert second["clock_out"] == "18:30"
    assert second["break_time"] == "1h"
    assert second["work_time"] == "8h"
    assert second["note"] == "client visit"
    assert second["status"] == "Approved"
    assert rows[2]["status"] == "Pending"
