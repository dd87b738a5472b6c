from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RecordStatus
from ..payroll.time_calculation import DailyStats
from .model import AttendanceRecord, BreakInterval, WorkSpan


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user_between(self, user_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Records of one user in [start_date, end_date], ordered by date."""

        raise NotImplementedError

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        status: Optional[RecordStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_status(self, status: RecordStatus, *, limit: int = 500) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        work_spans: Sequence[WorkSpan],
        breaks: Sequence[BreakInterval],
        status: RecordStatus,
        note: str,
        work_content: str,
        stats: DailyStats,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        record_id: int,
        work_spans: Sequence[WorkSpan],
        breaks: Sequence[BreakInterval],
        status: RecordStatus,
        note: str,
        work_content: str,
        stats: DailyStats,
    ) -> bool:
        raise NotImplementedError

    def update_status(self, *, record_id: int, status: RecordStatus, expected: RecordStatus) -> bool:
        """Change status only while the stored status still equals ``expected``."""

        raise NotImplementedError

    def delete_by_id(self, record_id: int) -> bool:
        raise NotImplementedError
