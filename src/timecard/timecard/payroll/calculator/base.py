from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Sequence

from ...attendance.model import BreakInterval, WorkSpan
from ..time_calculation import DailyStats


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def daily_stats(self, spans: Sequence[WorkSpan], breaks: Sequence[BreakInterval]) -> DailyStats:
        raise NotImplementedError

    @abstractmethod
    def estimate_salary(
        self, *, work_minutes: int, overtime_minutes: int, night_minutes: int, hourly_wage: int | Decimal
    ) -> int:
        raise NotImplementedError
