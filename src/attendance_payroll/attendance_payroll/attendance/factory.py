from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional

from ..core.enums import AttendanceStatus
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, workday_start: Optional[time], grace_minutes: int) -> AttendanceStrategy:
        if workday_start is None:
            return NormalStrategy()

        start = datetime.combine(now.date(), workday_start)
        if now <= start + timedelta(minutes=grace_minutes):
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, now: datetime, current_status: AttendanceStatus) -> AttendanceStrategy:
        if current_status == AttendanceStatus.LATE:
            return LateStrategy()
        return NormalStrategy()
