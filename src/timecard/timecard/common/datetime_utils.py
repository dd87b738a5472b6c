from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError

_HHMM_RE = re.compile(r"^([01][0-9]|2[0-3]):([0-5][0-9])$")
_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Date must be in YYYY-MM-DD format")


def parse_hhmm(value: str) -> int:
    """Parse a 24h HH:MM string into minutes since midnight."""
    m = _HHMM_RE.match((value or "").strip())
    if not m:
        raise ValidationError("Time must be in HH:MM format")
    return int(m.group(1)) * 60 + int(m.group(2))


def format_hhmm(minutes: int) -> str:
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month, used to filter records without slicing date strings."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= int(self.month) <= 12:
            raise ValidationError("Month must be between 1 and 12")

    @classmethod
    def of(cls, value: date) -> "YearMonth":
        return cls(value.year, value.month)

    @classmethod
    def current(cls, today: Optional[date] = None) -> "YearMonth":
        return cls.of(today or now_local().date())

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        """Parse YYYY-MM."""
        m = _YEAR_MONTH_RE.match((value or "").strip())
        if not m:
            raise ValidationError("Month must be in YYYY-MM format")
        return cls(int(m.group(1)), int(m.group(2)))

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month

    def previous(self) -> "YearMonth":
        if self.month == 1:
            return YearMonth(self.year - 1, 12)
        return YearMonth(self.year, self.month - 1)

    def next(self) -> "YearMonth":
        if self.month == 12:
            return YearMonth(self.year + 1, 1)
        return YearMonth(self.year, self.month + 1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
