from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..attendance.model import AttendancePeriod
from ..attendance.repository import AttendanceRepository
from ..workers.repository import WorkerDirectory
from .aggregation import daily_snapshot, period_summary
from .model import AttendanceSummary, DailySnapshot


class ReportService:
    """Read side: folds run over a repository snapshot, never a live view."""

    def __init__(self, attendance: AttendanceRepository, workers: WorkerDirectory):
        self._attendance = attendance
        self._workers = workers

    def daily_snapshot(self, day: date, roster: Optional[Iterable[str]] = None) -> DailySnapshot:
        if roster is None:
            roster = [w.worker_id for w in self._workers.list_active()]
        return daily_snapshot(self._attendance.list_for_date(day), day, roster)

    def period_summary(self, worker_id: str, period: AttendancePeriod) -> AttendanceSummary:
        records = self._attendance.list_for_worker(worker_id, start_date=period.start_date, end_date=period.end_date)
        return period_summary(records, worker_id, period)
