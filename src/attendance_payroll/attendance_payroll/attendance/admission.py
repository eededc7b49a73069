from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ScanAction, WorkerStatus
from .model import AttendanceRecord


@dataclass(frozen=True)
class ScanDecision:
    """Outcome of admission control. A denial is data, not an error."""

    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls) -> "ScanDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "ScanDecision":
        return cls(allowed=False, reason=reason)


def can_scan(
    record: Optional[AttendanceRecord],
    action: ScanAction,
    worker_status: WorkerStatus = WorkerStatus.ACTIVE,
) -> ScanDecision:
    """Decide whether `action` is legal given the worker's record for today.

    Every path that creates or mutates a record from a punch must ask this
    first, while holding the (worker, day) lock.
    """

    if worker_status != WorkerStatus.ACTIVE:
        return ScanDecision.deny(f"worker is {worker_status.value}; cannot mark attendance")

    if record is None:
        if action == ScanAction.CLOCK_IN:
            return ScanDecision.allow()
        return ScanDecision.deny("no clock-in record found for today")

    if record.clock_in is None:
        # declared day (leave, holiday, absence) has no punches to pair with
        return ScanDecision.deny(f"attendance already recorded for today as {record.status.value}")

    if record.clock_out is None:
        if action == ScanAction.CLOCK_OUT:
            return ScanDecision.allow()
        return ScanDecision.deny("already clocked in today")

    if action == ScanAction.CLOCK_IN:
        return ScanDecision.deny("already completed attendance for today")
    return ScanDecision.deny("already clocked out today")
