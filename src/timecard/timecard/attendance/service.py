from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import YearMonth, now_local
from ..common.validators import require_max_length
from ..core.constants import TEXT_FIELD_MAX_LENGTH
from ..core.enums import RecordStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..payroll.time_calculation import DailyStats, format_minutes
from ..users.service import SessionUser
from .model import AttendanceRecord, BreakInterval, WorkSpan
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    RecordStatus.DRAFT: "Draft",
    RecordStatus.PENDING: "Pending",
    RecordStatus.APPROVED: "Approved",
    RecordStatus.REMANDED: "Remanded",
}

STATUS_CSS = {
    RecordStatus.DRAFT: "bg-secondary",
    RecordStatus.PENDING: "bg-warning text-dark",
    RecordStatus.APPROVED: "bg-success",
    RecordStatus.REMANDED: "bg-danger",
}


def _is_blank_row(row: dict, *keys: str) -> bool:
    return all(not str(row.get(k) or "").strip() for k in keys)


def parse_work_spans(rows: Iterable[dict]) -> list[WorkSpan]:
    """Form rows ``{"id", "start_time", "end_time"}`` -> WorkSpan; blank rows are skipped."""
    return [WorkSpan.from_dict(r) for r in rows or [] if not _is_blank_row(r, "start_time", "end_time")]


def parse_breaks(rows: Iterable[dict]) -> list[BreakInterval]:
    """Form rows ``{"start", "end"}`` -> BreakInterval; blank rows are skipped."""
    return [BreakInterval.from_dict(r) for r in rows or [] if not _is_blank_row(r, "start", "end")]


class AttendanceService:
    """Use cases for an employee's own day records."""

    def __init__(self, attendance: AttendanceRepository, *, calculator: Optional[PayrollCalculator] = None):
        self._attendance = attendance
        self._calculator = calculator or StandardPayrollCalculator()

    def preview(self, work_spans: Sequence[dict], breaks: Sequence[dict]) -> DailyStats:
        return self._calculator.daily_stats(parse_work_spans(work_spans), parse_breaks(breaks))

    def save_record(
        self,
        current: SessionUser,
        *,
        work_date: date,
        work_spans: Sequence[dict],
        breaks: Sequence[dict] = (),
        note: str = "",
        work_content: str = "",
        submit: bool = False,
        today: Optional[date] = None,
    ) -> int:
        today = today or now_local().date()
        if work_date > today:
            raise ValidationError("Cannot record hours for a future date")

        spans = parse_work_spans(work_spans)
        if not spans:
            raise ValidationError("Enter at least one work span")
        brks = parse_breaks(breaks)
        note = require_max_length((note or "").strip(), "Note", TEXT_FIELD_MAX_LENGTH)
        work_content = require_max_length((work_content or "").strip(), "Work content", TEXT_FIELD_MAX_LENGTH)

        stats = self._calculator.daily_stats(spans, brks)
        existing = self._attendance.get_for_user_and_date(current.user_id, work_date)

        if not existing:
            status = RecordStatus.PENDING if submit else RecordStatus.DRAFT
            record_id = self._attendance.create(
                user_id=current.user_id,
                work_date=work_date,
                work_spans=spans,
                breaks=brks,
                status=status,
                note=note,
                work_content=work_content,
                stats=stats,
            )
            logger.info("User %s created record %s for %s (%s)", current.user_id, record_id, work_date, status.value)
            return record_id

        if existing.status.is_locked:
            raise ValidationError("Approved records cannot be edited")

        status = existing.status
        if submit and status != RecordStatus.PENDING:
            status = status.transition_to(RecordStatus.PENDING)

        ok = self._attendance.update(
            record_id=existing.record_id,
            work_spans=spans,
            breaks=brks,
            status=status,
            note=note,
            work_content=work_content,
            stats=stats,
        )
        if not ok:
            raise ValidationError("Failed to save the record")
        logger.info("User %s updated record %s (%s)", current.user_id, existing.record_id, status.value)
        return existing.record_id

    def _get_own(self, current: SessionUser, record_id: int) -> AttendanceRecord:
        rec = self._attendance.get_by_id(int(record_id))
        if not rec:
            raise NotFoundError("Record does not exist")
        if rec.user_id != current.user_id:
            raise AuthorizationError("You can only change your own records")
        return rec

    def submit_record(self, current: SessionUser, record_id: int) -> None:
        rec = self._get_own(current, record_id)
        status = rec.status.transition_to(RecordStatus.PENDING)
        if not self._attendance.update_status(record_id=rec.record_id, status=status, expected=rec.status):
            raise ValidationError("The record was changed by someone else, reload and try again")

    def delete_record(self, current: SessionUser, record_id: int) -> None:
        rec = self._get_own(current, record_id)
        if rec.status.is_locked:
            raise ValidationError("Approved records cannot be deleted")
        if not self._attendance.delete_by_id(rec.record_id):
            raise ValidationError("Failed to delete the record")
        logger.info("User %s deleted record %s", current.user_id, rec.record_id)

    def get_record(self, current: SessionUser, work_date: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(current.user_id, work_date)

    def list_month(self, user_id: int, month: YearMonth) -> list[AttendanceRecord]:
        rows = self._attendance.list_for_user_between(
            int(user_id), start_date=month.first_day, end_date=month.last_day
        )
        return sorted(rows, key=lambda r: r.work_date)

    def month_view(self, current: SessionUser, month: YearMonth) -> list[dict]:
        return [to_ui(r) for r in self.list_month(current.user_id, month)]


def to_ui(r: AttendanceRecord) -> dict[str, Any]:
    return {
        "record_id": r.record_id,
        "user_id": r.user_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "work_spans": [s.to_dict() for s in r.work_spans],
        "breaks": [b.to_dict() for b in r.breaks],
        "note": r.note,
        "work_content": r.work_content,
        "status": r.status.value,
        "status_label": STATUS_LABELS.get(r.status, r.status.value),
        "css_class": STATUS_CSS.get(r.status, "bg-secondary"),
        "computed_work_min": r.computed_work_min,
        "computed_overtime_min": r.computed_overtime_min,
        "computed_night_min": r.computed_night_min,
        "work_time": format_minutes(r.computed_work_min),
        "overtime": format_minutes(r.computed_overtime_min),
        "night_time": format_minutes(r.computed_night_min),
    }
