from datetime import date, datetime, time

import pytest

from attendance_payroll.attendance.forms import ManualEntryForm
from attendance_payroll.core.enums import AttendanceStatus, EntryMethod, HalfDayType
from attendance_payroll.core.exceptions import InvalidTimeRange, ValidationError
from tests.factories import qr_for

NOW = datetime(2024, 1, 15, 19, 0)
DAY = date(2024, 1, 15)


def test_manual_present_entry_derives_hours(attendance):
    form = ManualEntryForm(
        worker_id="WKR001",
        work_date=DAY,
        status=AttendanceStatus.PRESENT,
        clock_in_time=time(8, 0),
        clock_out_time=time(18, 30),
    )
    record = attendance.record_manual_entry(form, now=NOW)

    assert record.total_hours == 10.5
    assert record.overtime_hours == 2.5
    assert record.clock_in.method == EntryMethod.MANUAL
    assert record.clock_in.verified_by == "admin"


def test_present_requires_both_times(attendance):
    form = ManualEntryForm(worker_id="WKR001", work_date=DAY, status=AttendanceStatus.PRESENT, clock_in_time=time(8, 0))
    with pytest.raises(ValidationError, match="clock-out time is required"):
        attendance.record_manual_entry(form, now=NOW)


def test_clock_out_before_clock_in_is_rejected(attendance):
    form = ManualEntryForm(
        worker_id="WKR001",
        work_date=DAY,
        status=AttendanceStatus.PRESENT,
        clock_in_time=time(17, 0),
        clock_out_time=time(9, 0),
    )
    with pytest.raises(InvalidTimeRange):
        attendance.record_manual_entry(form, now=NOW)


def test_leave_requires_leave_type(attendance):
    form = ManualEntryForm(worker_id="WKR001", work_date=DAY, status=AttendanceStatus.ON_LEAVE)
    with pytest.raises(ValidationError):
        attendance.record_manual_entry(form, now=NOW)

    record = attendance.record_manual_entry(
        ManualEntryForm(worker_id="WKR001", work_date=DAY, status=AttendanceStatus.ON_LEAVE, leave_type="sick"),
        now=NOW,
    )
    assert record.leave_type == "sick"
    assert record.total_hours is None


def test_half_day_without_times_counts_half_standard_hours(attendance):
    form = ManualEntryForm(
        worker_id="WKR001", work_date=DAY, status=AttendanceStatus.HALF_DAY, half_day_type=HalfDayType.FIRST_HALF
    )
    record = attendance.record_manual_entry(form, now=NOW)

    assert record.total_hours == 4.0
    assert record.half_day_type == HalfDayType.FIRST_HALF


def test_half_day_requires_type(attendance):
    form = ManualEntryForm(worker_id="WKR001", work_date=DAY, status=AttendanceStatus.HALF_DAY)
    with pytest.raises(ValidationError, match="half-day type"):
        attendance.record_manual_entry(form, now=NOW)


def test_absent_entry_clears_times(attendance):
    form = ManualEntryForm(
        worker_id="WKR001", work_date=DAY, status=AttendanceStatus.ABSENT, clock_in_time=time(9, 0)
    )
    record = attendance.record_manual_entry(form, now=NOW)

    assert record.clock_in is None
    assert record.total_hours is None


def test_manual_entry_refuses_existing_record(attendance):
    attendance.scan(qr_for("WKR001"), now=datetime(2024, 1, 15, 8, 30))
    form = ManualEntryForm(worker_id="WKR001", work_date=DAY, status=AttendanceStatus.ABSENT)

    with pytest.raises(ValidationError, match="already recorded"):
        attendance.record_manual_entry(form, now=NOW)


def test_declared_record_blocks_later_scans(attendance):
    attendance.record_manual_entry(
        ManualEntryForm(worker_id="WKR001", work_date=DAY, status=AttendanceStatus.ON_LEAVE, leave_type="casual"),
        now=datetime(2024, 1, 15, 7, 0),
    )
    result = attendance.scan(qr_for("WKR001"), now=datetime(2024, 1, 15, 8, 30))

    assert not result.allowed
    assert "on_leave" in result.reason


def test_form_from_camel_case_mapping():
    form = ManualEntryForm.from_mapping(
        {"workerId": "WKR001", "date": "2024-01-15", "status": "present", "clockInTime": "08:00", "clockOutTime": "17:00"}
    )
    assert form.clock_in_time == time(8, 0)
    assert form.status == AttendanceStatus.PRESENT


def test_form_rejects_unknown_status():
    with pytest.raises(ValidationError):
        ManualEntryForm.from_mapping({"worker_id": "WKR001", "date": "2024-01-15", "status": "sleeping"})


def test_unknown_leave_type_is_rejected(attendance):
    form = ManualEntryForm(worker_id="WKR001", work_date=DAY, status=AttendanceStatus.ON_LEAVE, leave_type="vacation")
    with pytest.raises(ValidationError, match="leave type must be one of"):
        attendance.record_manual_entry(form, now=NOW)
