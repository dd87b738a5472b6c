"""Daily time accounting: worked, overtime and night minutes for one day.

Times are integer minutes since midnight of the record date. An interval whose
end is earlier than its start runs past midnight and is resolved to
``end + 1440``; every interval is resolved on its own, never relative to the
other spans of the day.

Night work is counted against the single 22:00-05:00 window ``[1320, 1740)``
in the same coordinates. Breaks are resolved with the same midnight rule and
compared with each span as they are, so a 02:00-03:00 break does not reduce a
22:00-06:00 span and a span starting after midnight earns no night minutes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Iterable, Sequence

from ..attendance.model import BreakInterval, WorkSpan
from ..core.constants import (
    MINUTES_PER_DAY,
    NIGHT_END_MINUTE,
    NIGHT_PREMIUM_RATE,
    NIGHT_START_MINUTE,
    OVERTIME_PREMIUM_RATE,
    OVERTIME_THRESHOLD_MINUTES,
)

Interval = tuple[int, int]

NIGHT_WINDOW: Interval = (NIGHT_START_MINUTE, NIGHT_END_MINUTE)


@dataclass(frozen=True)
class DailyStats:
    work_minutes: int = 0
    overtime_minutes: int = 0
    night_minutes: int = 0


def resolve_interval(start: int, end: int) -> Interval:
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def overlap_minutes(a: Interval, b: Interval) -> int:
    return max(0, min(a[1], b[1]) - max(a[0], b[0]))


def _resolve_breaks(breaks: Iterable[BreakInterval]) -> list[Interval]:
    out: list[Interval] = []
    for brk in breaks:
        start, end = resolve_interval(brk.start_minute, brk.end_minute)
        if end > start:
            out.append((start, end))
    return out


def compute_daily_stats(spans: Sequence[WorkSpan], breaks: Sequence[BreakInterval]) -> DailyStats:
    """Worked, overtime and night minutes for one day.

    Per span: duration minus every break overlap, floored at zero. Night
    minutes are the span's overlap with the night window minus the breaks that
    fall inside that overlap, floored at zero. Overtime is applied once to the
    daily total.
    """

    break_intervals = _resolve_breaks(breaks)
    work_minutes = 0
    night_minutes = 0

    for span in spans:
        interval = resolve_interval(span.start_minute, span.end_minute)
        duration = interval[1] - interval[0]
        if duration <= 0:
            continue

        deduction = sum(overlap_minutes(interval, b) for b in break_intervals)
        work_minutes += max(0, duration - deduction)

        night_overlap = overlap_minutes(interval, NIGHT_WINDOW)
        if night_overlap > 0:
            night_part = (max(interval[0], NIGHT_WINDOW[0]), min(interval[1], NIGHT_WINDOW[1]))
            night_deduction = sum(overlap_minutes(night_part, b) for b in break_intervals)
            night_minutes += max(0, night_overlap - night_deduction)

    overtime_minutes = max(0, work_minutes - OVERTIME_THRESHOLD_MINUTES)
    return DailyStats(
        work_minutes=work_minutes,
        overtime_minutes=overtime_minutes,
        night_minutes=night_minutes,
    )


def estimate_salary(work_minutes: int, overtime_minutes: int, night_minutes: int, hourly_wage: int | Decimal) -> int:
    """Base pay for all worked minutes plus 25% overtime and 25% night premiums.

    Premiums stack: a night minute that is also overtime earns both.
    """

    wage = Fraction(hourly_wage)
    base = Fraction(int(work_minutes), 60) * wage
    overtime = Fraction(int(overtime_minutes), 60) * wage * OVERTIME_PREMIUM_RATE
    night = Fraction(int(night_minutes), 60) * wage * NIGHT_PREMIUM_RATE
    return math.floor(base + overtime + night)


def total_break_minutes(breaks: Iterable[BreakInterval]) -> int:
    total = 0
    for brk in breaks:
        start, end = resolve_interval(brk.start_minute, brk.end_minute)
        total += end - start
    return total


def minutes_to_hours_and_minutes(minutes: int) -> tuple[int, int]:
    minutes = int(minutes)
    return minutes // 60, minutes % 60


def format_minutes(minutes: int) -> str:
    """480 -> '8h', 510 -> '8h 30m', 45 -> '45m'."""
    hours, mins = minutes_to_hours_and_minutes(minutes)
    if hours > 0 and mins > 0:
        return f"{hours}h {mins}m"
    if hours > 0:
        return f"{hours}h"
    return f"{mins}m"
