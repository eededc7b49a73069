from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..attendance.model import AttendancePeriod


@dataclass(frozen=True)
class DailySnapshot:
    """Organization-wide attendance for one day."""

    work_date: date
    total: int
    present: int
    absent: int
    late: int
    half_day: int
    on_leave: int
    overtime: int


@dataclass(frozen=True)
class AttendanceSummary:
    """Per-worker read model for a period; always recomputed from records."""

    worker_id: str
    period: AttendancePeriod
    total_working_days: int
    # weekdays in the period not declared holiday/weekend, record or not
    scheduled_working_days: int
    present_days: int
    absent_days: int
    late_days: int
    half_days: int
    leave_days: int
    holiday_days: int
    weekend_days: int
    total_hours: float
    regular_hours: float
    overtime_hours: float
    attendance_percentage: float

    @property
    def paid_days(self) -> float:
        """Days that earn wages: full attendance plus half of each half day."""
        return self.present_days + 0.5 * self.half_days
