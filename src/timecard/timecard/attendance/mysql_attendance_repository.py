from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_column, fetchall, fetchone, load_json_column
from ..payroll.time_calculation import DailyStats
from .model import AttendanceRecord, BreakInterval, WorkSpan
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    record_id, user_id, work_date, work_spans, breaks, status, note, work_content,
    computed_work_min, computed_overtime_min, computed_night_min
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        work_spans=tuple(WorkSpan.from_dict(s) for s in load_json_column(r.get("work_spans"))),
        breaks=tuple(BreakInterval.from_dict(b) for b in load_json_column(r.get("breaks"))),
        status=RecordStatus(r["status"]),
        note=r.get("note") or "",
        work_content=r.get("work_content") or "",
        computed_work_min=int(r.get("computed_work_min") or 0),
        computed_overtime_min=int(r.get("computed_overtime_min") or 0),
        computed_night_min=int(r.get("computed_night_min") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE record_id=%s",
                (int(record_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_user_between(self, user_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        status: Optional[RecordStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        where = ["work_date BETWEEN %s AND %s"]
        params: list[Any] = [start_date, end_date]
        if status is not None:
            where.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE {' AND '.join(where)}
                ORDER BY work_date ASC, user_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_by_status(self, status: RecordStatus, *, limit: int = 500) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE status=%s
                ORDER BY work_date ASC, user_id ASC
                LIMIT %s
                """,
                (status.value, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    user_id, work_date, work_spans, breaks, status, note, work_content,
                    computed_work_min, computed_overtime_min, computed_night_min
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    work_date,
                    dump_json_column([s.to_dict() for s in work_spans]),
                    dump_json_column([b.to_dict() for b in breaks]),
                    status.value,
                    note,
                    work_content,
                    stats.work_minutes,
                    stats.overtime_minutes,
                    stats.night_minutes,
                ),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET work_spans=%s, breaks=%s, status=%s, note=%s, work_content=%s,
                    computed_work_min=%s, computed_overtime_min=%s, computed_night_min=%s
                WHERE record_id=%s AND status<>%s
                """,
                (
                    dump_json_column([s.to_dict() for s in work_spans]),
                    dump_json_column([b.to_dict() for b in breaks]),
                    status.value,
                    note,
                    work_content,
                    stats.work_minutes,
                    stats.overtime_minutes,
                    stats.night_minutes,
                    int(record_id),
                    RecordStatus.APPROVED.value,
                ),
            )
            if cur.rowcount > 0:
                return True
            # rowcount is 0 when nothing changed; the row may still be editable.
            cur.execute(
                "SELECT 1 AS found FROM attendance_records WHERE record_id=%s AND status<>%s",
                (int(record_id), RecordStatus.APPROVED.value),
            )
            return fetchone(cur) is not None

    def update_status(self, *, record_id: int, status: RecordStatus, expected: RecordStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET status=%s WHERE record_id=%s AND status=%s",
                (status.value, int(record_id), expected.value),
            )
            return cur.rowcount > 0

    def delete_by_id(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0
