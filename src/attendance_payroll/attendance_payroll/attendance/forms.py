from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.validators import require_enum, require_non_empty
from ..core.constants import LEAVE_TYPES
from ..core.enums import AttendanceStatus, EntryMethod, HalfDayType
from ..core.exceptions import InvalidTimeRange, ValidationError
from .model import AttendanceEntry, Location
from .timecalc import compute_hours, compute_overtime, round_half_up

TIMED_STATUSES = {AttendanceStatus.PRESENT, AttendanceStatus.LATE}


@dataclass(frozen=True)
class ManualEntryForm:
    """Administrator-authored attendance for one worker and day."""

    worker_id: str
    work_date: date
    status: AttendanceStatus
    clock_in_time: Optional[time] = None
    clock_out_time: Optional[time] = None
    leave_type: Optional[str] = None
    half_day_type: Optional[HalfDayType] = None
    project_id: Optional[str] = None
    notes: Optional[str] = None
    verified_by: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ManualEntryForm":
        return cls(
            worker_id=require_non_empty(_pick(data, "worker_id", "workerId"), "worker"),
            work_date=parse_iso_date(require_non_empty(_pick(data, "date", "work_date"), "date")),
            status=require_enum(AttendanceStatus, require_non_empty(_pick(data, "status"), "status"), "status"),
            clock_in_time=_optional_time(_pick(data, "clock_in_time", "clockInTime")),
            clock_out_time=_optional_time(_pick(data, "clock_out_time", "clockOutTime")),
            leave_type=_optional_str(_pick(data, "leave_type", "leaveType")),
            half_day_type=_optional_half_day(_pick(data, "half_day_type", "halfDayType")),
            project_id=_optional_str(_pick(data, "project_id", "projectId")),
            notes=_optional_str(_pick(data, "notes")),
            verified_by=_optional_str(_pick(data, "verified_by", "verifiedBy")),
        )


@dataclass(frozen=True)
class RecordPatch:
    """Edit of an existing record; None means keep the stored value."""

    status: Optional[AttendanceStatus] = None
    clock_in_time: Optional[time] = None
    clock_out_time: Optional[time] = None
    leave_type: Optional[str] = None
    half_day_type: Optional[HalfDayType] = None
    project_id: Optional[str] = None
    notes: Optional[str] = None
    edited_by: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RecordPatch":
        status = _pick(data, "status")
        return cls(
            status=require_enum(AttendanceStatus, status, "status") if status else None,
            clock_in_time=_optional_time(_pick(data, "clock_in_time", "clockInTime")),
            clock_out_time=_optional_time(_pick(data, "clock_out_time", "clockOutTime")),
            leave_type=_optional_str(_pick(data, "leave_type", "leaveType")),
            half_day_type=_optional_half_day(_pick(data, "half_day_type", "halfDayType")),
            project_id=_optional_str(_pick(data, "project_id", "projectId")),
            notes=_optional_str(_pick(data, "notes")),
            edited_by=_optional_str(_pick(data, "edited_by", "editedBy")),
        )


@dataclass(frozen=True)
class DeclaredFields:
    """Status-dependent fields of a record after validation."""

    status: AttendanceStatus
    clock_in: Optional[AttendanceEntry]
    clock_out: Optional[AttendanceEntry]
    total_hours: Optional[float]
    overtime_hours: Optional[float]
    leave_type: Optional[str]
    half_day_type: Optional[HalfDayType]


def manual_entry(
    work_date: date,
    at: time,
    *,
    verified_by: Optional[str] = None,
    notes: Optional[str] = None,
    location: Optional[Location] = None,
) -> AttendanceEntry:
    return AttendanceEntry(
        timestamp=datetime.combine(work_date, at),
        method=EntryMethod.MANUAL,
        location=location,
        verified_by=verified_by or "admin",
        notes=notes,
    )


def declare(
    *,
    status: AttendanceStatus,
    clock_in: Optional[AttendanceEntry],
    clock_out: Optional[AttendanceEntry],
    leave_type: Optional[str],
    half_day_type: Optional[HalfDayType],
    standard_hours: float,
    open_shift: bool = False,
) -> DeclaredFields:
    """Validate the fields a status requires and derive the hours.

    Shared by manual entry, edits and bulk mark-present so every path into a
    declared state enforces the same rules.

    `open_shift` marks a worker still clocked in: a present/late record may
    then lack its clock-out, and carries no hours yet.
    """

    if status in TIMED_STATUSES:
        if clock_in is None:
            raise ValidationError("clock-in time is required")
        if clock_out is None:
            if open_shift:
                return DeclaredFields(
                    status=status,
                    clock_in=clock_in,
                    clock_out=None,
                    total_hours=None,
                    overtime_hours=None,
                    leave_type=None,
                    half_day_type=None,
                )
            raise ValidationError("clock-out time is required")
        total = _checked_hours(clock_in, clock_out)
        overtime = compute_overtime(total, standard_hours)
        return DeclaredFields(
            status=status,
            clock_in=clock_in,
            clock_out=clock_out,
            total_hours=total,
            overtime_hours=overtime if overtime > 0 else None,
            leave_type=None,
            half_day_type=None,
        )

    if status == AttendanceStatus.HALF_DAY:
        if half_day_type is None:
            raise ValidationError("half-day type is required")
        if (clock_in is None) != (clock_out is None):
            raise ValidationError("half-day entries need both clock-in and clock-out times, or neither")
        if clock_in is not None and clock_out is not None:
            total = round_half_up(_checked_hours(clock_in, clock_out) / 2)
        else:
            total = round_half_up(standard_hours / 2)
        return DeclaredFields(
            status=status,
            clock_in=clock_in,
            clock_out=clock_out,
            total_hours=total,
            overtime_hours=None,
            leave_type=None,
            half_day_type=half_day_type,
        )

    if status == AttendanceStatus.ON_LEAVE:
        leave_type = require_non_empty(leave_type, "leave type").lower()
        if leave_type not in LEAVE_TYPES:
            raise ValidationError(f"leave type must be one of: {', '.join(LEAVE_TYPES)}")
    else:
        leave_type = None

    return DeclaredFields(
        status=status,
        clock_in=None,
        clock_out=None,
        total_hours=None,
        overtime_hours=None,
        leave_type=leave_type,
        half_day_type=None,
    )


def _checked_hours(clock_in: AttendanceEntry, clock_out: AttendanceEntry) -> float:
    if clock_out.timestamp <= clock_in.timestamp:
        raise InvalidTimeRange("clock-out time must be after clock-in time")
    return compute_hours(clock_in.timestamp, clock_out.timestamp)


def _pick(data: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in data and data[name] not in (None, ""):
            return data[name]
    return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_time(value: Any) -> Optional[time]:
    if value is None:
        return None
    if isinstance(value, time):
        return value
    return parse_hhmm(str(value))


def _optional_half_day(value: Any) -> Optional[HalfDayType]:
    if value is None:
        return None
    return require_enum(HalfDayType, value, "half-day type")
