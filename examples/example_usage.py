"""Example: use the time calculation and the service layer without Flask.

Controllers are thin; the business rules live in the services and the
calculator.
"""

from src.timecard.timecard.attendance.model import BreakInterval, WorkSpan
from src.timecard.timecard.payroll.time_calculation import compute_daily_stats, estimate_salary, format_minutes


def main():
    days = {
        "day shift": ([WorkSpan.from_hhmm("09:00", "18:00")], [BreakInterval.from_hhmm("12:00", "13:00")]),
        "long day": ([WorkSpan.from_hhmm("09:00", "23:00")], []),
        "night shift": ([WorkSpan.from_hhmm("22:00", "02:00")], []),
        "split shift": (
            [WorkSpan.from_hhmm("08:00", "12:00"), WorkSpan.from_hhmm("17:00", "23:30")],
            [BreakInterval.from_hhmm("20:00", "20:30")],
        ),
    }

    total = [0, 0, 0]
    for label, (spans, breaks) in days.items():
        stats = compute_daily_stats(spans, breaks)
        total[0] += stats.work_minutes
        total[1] += stats.overtime_minutes
        total[2] += stats.night_minutes
        print(
            f"{label:<12} work={format_minutes(stats.work_minutes):<8} "
            f"overtime={format_minutes(stats.overtime_minutes):<8} night={format_minutes(stats.night_minutes)}"
        )

    print("estimated salary @1500/h:", estimate_salary(*total, 1500))


if __name__ == "__main__":
    main()
