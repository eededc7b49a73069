"""Pure folds over attendance records.

Nothing here reads a repository or the clock: same input, same output.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, timedelta
from typing import Iterable

from ..attendance.model import AttendancePeriod, AttendanceRecord
from ..attendance.timecalc import round_half_up
from ..core.enums import AttendanceStatus
from .model import AttendanceSummary, DailySnapshot

NON_WORKING = {AttendanceStatus.HOLIDAY, AttendanceStatus.WEEKEND}


def working_days_in_period(period: AttendancePeriod, records: Iterable[AttendanceRecord] = ()) -> int:
    """Monday-Friday dates in the period, minus weekdays declared holiday or weekend.

    Independent of who turned up: a day without a record still counts.
    """

    days_off = {r.work_date for r in records if r.status in NON_WORKING and period.contains(r.work_date)}
    count = 0
    day = period.start_date
    while day <= period.end_date:
        if day.weekday() < 5 and day not in days_off:
            count += 1
        day += timedelta(days=1)
    return count


def daily_snapshot(records: Iterable[AttendanceRecord], day: date, active_roster: Iterable[str]) -> DailySnapshot:
    """Count today's attendance; rostered workers with no record count as absent."""

    roster = set(active_roster)
    todays = [r for r in records if r.work_date == day]
    counts = Counter(r.status for r in todays)
    with_record = {r.worker_id for r in todays}

    # absence is the default: anyone rostered without a record is absent
    missing = len(roster - with_record)

    return DailySnapshot(
        work_date=day,
        total=len(roster),
        present=counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE] + counts[AttendanceStatus.HALF_DAY],
        absent=counts[AttendanceStatus.ABSENT] + missing,
        late=counts[AttendanceStatus.LATE],
        half_day=counts[AttendanceStatus.HALF_DAY],
        on_leave=counts[AttendanceStatus.ON_LEAVE],
        overtime=sum(1 for r in todays if (r.overtime_hours or 0) > 0),
    )


def period_summary(records: Iterable[AttendanceRecord], worker_id: str, period: AttendancePeriod) -> AttendanceSummary:
    matching = sorted(
        (r for r in records if r.worker_id == worker_id and period.contains(r.work_date)),
        key=lambda r: (r.work_date, r.record_id),
    )

    counts = Counter(r.status for r in matching)
    total_hours = 0.0
    overtime_hours = 0.0
    for r in matching:
        total_hours += r.total_hours or 0.0
        overtime_hours += r.overtime_hours or 0.0

    working_days = sum(1 for r in matching if r.status not in NON_WORKING)
    present_days = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE]
    percentage = present_days / working_days * 100 if working_days else 0.0

    total_hours = round_half_up(total_hours)
    overtime_hours = round_half_up(overtime_hours)
    return AttendanceSummary(
        worker_id=worker_id,
        period=period,
        total_working_days=working_days,
        scheduled_working_days=working_days_in_period(period, matching),
        present_days=present_days,
        absent_days=counts[AttendanceStatus.ABSENT],
        late_days=counts[AttendanceStatus.LATE],
        half_days=counts[AttendanceStatus.HALF_DAY],
        leave_days=counts[AttendanceStatus.ON_LEAVE],
        holiday_days=counts[AttendanceStatus.HOLIDAY],
        weekend_days=counts[AttendanceStatus.WEEKEND],
        total_hours=total_hours,
        regular_hours=round_half_up(total_hours - overtime_hours),
        overtime_hours=overtime_hours,
        attendance_percentage=round_half_up(percentage),
    )
