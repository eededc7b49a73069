from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Clock-in after the grace window. Decided at clock-in, never at clock-out."""

    def decide_checkin(self, *, now: datetime, workday_start: Optional[time], grace_minutes: int) -> StatusDecision:
        note = None
        if workday_start is not None:
            start = datetime.combine(now.date(), workday_start)
            minutes_late = int((now - start).total_seconds() // 60)
            note = f"late by {minutes_late} min"
        return StatusDecision(status=AttendanceStatus.LATE, note=note)

    def decide_checkout(self, *, now: datetime, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
