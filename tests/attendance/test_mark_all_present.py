from datetime import date, datetime

from attendance_payroll.core.enums import AttendanceStatus
from tests.factories import qr_for

DAY = date(2024, 1, 15)
NOW = datetime(2024, 1, 15, 18, 0)


def test_marks_active_workers_without_records(attendance):
    attendance.scan(qr_for("WKR001"), now=datetime(2024, 1, 15, 8, 30))

    result = attendance.mark_all_present(DAY, now=NOW)

    assert result.created == 2
    assert "WKR001" in result.skipped_worker_ids
    record = attendance.get_today_record("WKR002", DAY)
    assert record.status == AttendanceStatus.PRESENT
    assert record.total_hours == 8.0
    # the existing scan is never overwritten
    assert attendance.get_today_record("WKR001", DAY).is_clocked_in


def test_second_run_creates_nothing(attendance):
    attendance.mark_all_present(DAY, now=NOW)
    again = attendance.mark_all_present(DAY, now=NOW)

    assert again.created == 0
    assert again.skipped == 3


def test_explicit_roster_skips_inactive_and_unknown(attendance):
    result = attendance.mark_all_present(DAY, ["WKR002", "WKR004", "GHOST", "WKR002"], now=NOW)

    assert result.created == 1
    assert result.skipped_worker_ids == ("WKR004", "GHOST")
