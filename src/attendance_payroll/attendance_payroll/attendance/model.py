from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, EntryMethod, HalfDayType, PeriodType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Location:
    address: Optional[str] = None
    project_site: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class AttendanceEntry:
    """One punch (clock-in or clock-out)."""

    timestamp: datetime
    method: EntryMethod
    location: Optional[Location] = None
    verified_by: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one worker on one calendar day.

    There is never more than one record per (worker_id, work_date).
    """

    record_id: str
    worker_id: str
    employee_id: str
    work_date: date
    status: AttendanceStatus
    created_at: datetime
    updated_at: datetime
    clock_in: Optional[AttendanceEntry] = None
    clock_out: Optional[AttendanceEntry] = None
    total_hours: Optional[float] = None
    overtime_hours: Optional[float] = None
    leave_type: Optional[str] = None
    half_day_type: Optional[HalfDayType] = None
    project_id: Optional[str] = None
    department: str = ""
    employment_type: str = ""
    notes: Optional[str] = None

    @property
    def key(self) -> tuple[str, date]:
        return (self.worker_id, self.work_date)

    @property
    def is_clocked_in(self) -> bool:
        return self.clock_in is not None and self.clock_out is None


@dataclass(frozen=True)
class AttendancePeriod:
    start_date: date
    end_date: date
    period_type: PeriodType = PeriodType.CUSTOM

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValidationError("period start date must not be after end date")

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    @property
    def label(self) -> str:
        return f"{self.start_date.isoformat()} to {self.end_date.isoformat()}"


@dataclass(frozen=True)
class ScanPayload:
    """Decoded contents of a worker QR code."""

    worker_id: str
    employee_id: Optional[str] = None
    name: Optional[str] = None
    department: Optional[str] = None
    project: Optional[str] = None
    employment_type: Optional[str] = None
    issued_at: Optional[str] = None
    version: Optional[str] = None
