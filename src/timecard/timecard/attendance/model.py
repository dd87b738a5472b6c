from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..core.enums import RecordStatus


def _new_span_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class WorkSpan:
    """One clock-in to clock-out interval, in minutes since midnight.

    ``end_minute`` below ``start_minute`` means the span runs past midnight.
    """

    start_minute: int
    end_minute: int
    span_id: str = field(default_factory=_new_span_id, compare=False)

    @classmethod
    def from_hhmm(cls, start: str, end: str, span_id: Optional[str] = None) -> "WorkSpan":
        return cls(parse_hhmm(start), parse_hhmm(end), span_id or _new_span_id())

    @classmethod
    def from_dict(cls, data: dict) -> "WorkSpan":
        return cls.from_hhmm(data.get("start_time", ""), data.get("end_time", ""), data.get("id"))

    def to_dict(self) -> dict:
        return {
            "id": self.span_id,
            "start_time": format_hhmm(self.start_minute),
            "end_time": format_hhmm(self.end_minute),
        }


@dataclass(frozen=True)
class BreakInterval:
    """A pause deducted from the work spans it overlaps."""

    start_minute: int
    end_minute: int

    @classmethod
    def from_hhmm(cls, start: str, end: str) -> "BreakInterval":
        return cls(parse_hhmm(start), parse_hhmm(end))

    @classmethod
    def from_dict(cls, data: dict) -> "BreakInterval":
        return cls.from_hhmm(data.get("start", ""), data.get("end", ""))

    def to_dict(self) -> dict:
        return {"start": format_hhmm(self.start_minute), "end": format_hhmm(self.end_minute)}


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's hours for one calendar date."""

    record_id: int
    user_id: int
    work_date: date
    work_spans: tuple[WorkSpan, ...]
    breaks: tuple[BreakInterval, ...]
    status: RecordStatus
    note: str = ""
    work_content: str = ""
    computed_work_min: int = 0
    computed_overtime_min: int = 0
    computed_night_min: int = 0
