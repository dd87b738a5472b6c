from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ...attendance.model import BreakInterval, WorkSpan
from ..time_calculation import DailyStats, compute_daily_stats, estimate_salary
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: 8h daily threshold, 22:00-05:00 night window, stacked 25% premiums."""

    def daily_stats(self, spans: Sequence[WorkSpan], breaks: Sequence[BreakInterval]) -> DailyStats:
        return compute_daily_stats(spans, breaks)

    def estimate_salary(
        self, *, work_minutes: int, overtime_minutes: int, night_minutes: int, hourly_wage: int | Decimal
    ) -> int:
        return estimate_salary(work_minutes, overtime_minutes, night_minutes, hourly_wage)
