from __future__ import annotations

from decimal import Decimal

import pytest

from src.timecard.timecard.attendance.model import BreakInterval, WorkSpan
from src.timecard.timecard.payroll.time_calculation import (
    DailyStats,
    compute_daily_stats,
    estimate_salary,
    format_minutes,
    minutes_to_hours_and_minutes,
    overlap_minutes,
    resolve_interval,
    total_break_minutes,
)


def span(start: str, end: str) -> WorkSpan:
    return WorkSpan.from_hhmm(start, end)


def brk(start: str, end: str) -> BreakInterval:
    return BreakInterval.from_hhmm(start, end)


def test_empty_day_is_all_zero():
    assert compute_daily_stats([], []) == DailyStats(0, 0, 0)
    assert compute_daily_stats([], [brk("12:00", "13:00")]) == DailyStats(0, 0, 0)


def test_day_shift_with_lunch_break():
    stats = compute_daily_stats([span("09:00", "18:00")], [brk("12:00", "13:00")])
    assert stats == DailyStats(work_minutes=480, overtime_minutes=0, night_minutes=0)


def test_long_day_reaches_into_night_window():
    stats = compute_daily_stats([span("09:00", "23:00")], [])
    assert stats.work_minutes == 840
    assert stats.overtime_minutes == 360
    assert stats.night_minutes == 60


def test_span_crossing_midnight_is_all_night():
    stats = compute_daily_stats([span("22:00", "02:00")], [])
    assert stats == DailyStats(work_minutes=240, overtime_minutes=0, night_minutes=240)


def test_break_outside_span_is_ignored():
    stats = compute_daily_stats([span("09:00", "18:00")], [brk("08:00", "08:30")])
    assert stats.work_minutes == 540
    assert stats.overtime_minutes == 60


def test_zero_length_span_contributes_nothing():
    stats = compute_daily_stats([span("09:00", "09:00")], [])
    assert stats == DailyStats(0, 0, 0)

    stats = compute_daily_stats([span("22:30", "22:30"), span("09:00", "10:00")], [])
    assert stats == DailyStats(work_minutes=60, overtime_minutes=0, night_minutes=0)


def test_night_break_is_deducted_from_night_minutes():
    stats = compute_daily_stats([span("21:00", "03:00")], [brk("23:00", "23:30")])
    assert stats.work_minutes == 330
    assert stats.night_minutes == 270


def test_break_after_midnight_does_not_reduce_overnight_span():
    # the break resolves to [120, 180], the span to [1320, 1800]
    stats = compute_daily_stats([span("22:00", "06:00")], [brk("02:00", "03:00")])
    assert stats == DailyStats(work_minutes=480, overtime_minutes=0, night_minutes=420)


def test_break_crossing_midnight():
    # span [1200, 1680], break [1410, 1470], night part [1320, 1680]
    stats = compute_daily_stats([span("20:00", "04:00")], [brk("23:30", "00:30")])
    assert stats.work_minutes == 420
    assert stats.night_minutes == 300


def test_early_morning_span_is_outside_night_window():
    stats = compute_daily_stats([span("03:00", "08:00")], [])
    assert stats == DailyStats(work_minutes=300, overtime_minutes=0, night_minutes=0)


def test_night_break_deduction_is_limited_to_night_window():
    # break [1260, 1380] overlaps the span fully but the window only from 1320
    stats = compute_daily_stats([span("20:00", "01:00")], [brk("21:00", "23:00")])
    assert stats.work_minutes == 180
    assert stats.night_minutes == 120


def test_multiple_spans_share_one_overtime_threshold():
    stats = compute_daily_stats(
        [span("08:00", "12:00"), span("17:00", "23:30")],
        [brk("20:00", "20:30")],
    )
    assert stats.work_minutes == 600
    assert stats.overtime_minutes == 120
    assert stats.night_minutes == 90


def test_overlapping_breaks_floor_work_at_zero():
    stats = compute_daily_stats([span("09:00", "10:00")], [brk("09:00", "10:00"), brk("09:00", "10:00")])
    assert stats == DailyStats(0, 0, 0)


def test_chained_spans_longer_than_a_day_are_accepted():
    stats = compute_daily_stats([span("08:00", "07:00"), span("09:00", "17:00")], [])
    assert stats.work_minutes == 1860
    assert stats.overtime_minutes == 1380
    assert stats.night_minutes == 420


def test_properties_hold_for_single_spans_without_breaks():
    times = [f"{h:02d}:{m:02d}" for h in range(0, 24, 3) for m in (0, 30)]
    for start in times:
        for end in times:
            stats = compute_daily_stats([span(start, end)], [])
            assert stats.work_minutes >= 0
            assert stats.night_minutes >= 0
            assert stats.night_minutes <= stats.work_minutes
            assert stats.overtime_minutes == max(0, stats.work_minutes - 480)


def test_calculation_is_idempotent():
    spans = [span("18:00", "03:00")]
    breaks = [brk("00:00", "00:45")]
    assert compute_daily_stats(spans, breaks) == compute_daily_stats(spans, breaks)


def test_interval_helpers():
    assert resolve_interval(540, 1080) == (540, 1080)
    assert resolve_interval(1320, 120) == (1320, 1560)
    assert resolve_interval(600, 600) == (600, 600)
    assert overlap_minutes((0, 100), (50, 200)) == 50
    assert overlap_minutes((0, 100), (100, 200)) == 0


@pytest.mark.parametrize(
    "args, expected",
    [
        ((480, 0, 0, 1500), 12000),
        ((840, 360, 60, 1500), 23625),
        ((600, 120, 120, 1000), 11000),
        ((50, 0, 0, 1000), 833),
        ((480, 0, 0, 0), 0),
        ((0, 0, 0, 1500), 0),
    ],
)
def test_estimate_salary(args, expected):
    assert estimate_salary(*args) == expected


def test_estimate_salary_accepts_decimal_wage():
    assert estimate_salary(60, 0, 0, Decimal("1234.5")) == 1234


def test_premiums_are_exact_quarters():
    # 1 minute at 3/h: 0.05 base, 0.0125 per premium; 720 minutes of each -> 36 + 9 + 9
    assert estimate_salary(720, 720, 720, 3) == 54
    assert estimate_salary(1, 1, 1, Decimal("60.4")) == 1


def test_night_and_overtime_premiums_stack():
    # 1h that is both overtime and night earns base + 25% + 25%
    assert estimate_salary(540, 60, 60, 1000) - estimate_salary(480, 0, 0, 1000) == 1500


def test_formatting_helpers():
    assert minutes_to_hours_and_minutes(510) == (8, 30)
    assert format_minutes(480) == "8h"
    assert format_minutes(510) == "8h 30m"
    assert format_minutes(45) == "45m"
    assert format_minutes(0) == "0m"
    assert total_break_minutes([brk("12:00", "13:00"), brk("23:30", "00:15")]) == 105
