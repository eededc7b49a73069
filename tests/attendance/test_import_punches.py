from datetime import date, datetime

from attendance_payroll.attendance.service import PunchImport
from attendance_payroll.core.enums import EntryMethod, ScanAction


def test_import_replays_in_time_order(attendance):
    punches = [
        PunchImport("WKR001", datetime(2024, 1, 15, 17, 30), ScanAction.CLOCK_OUT),
        PunchImport("WKR001", datetime(2024, 1, 15, 8, 30), ScanAction.CLOCK_IN),
    ]
    result = attendance.import_punches(punches)

    assert result.imported == 2
    assert result.failed == 0
    record = attendance.get_today_record("WKR001", date(2024, 1, 15))
    assert record.total_hours == 9.0
    assert record.clock_in.method == EntryMethod.IMPORTED


def test_bad_rows_do_not_stop_the_batch(attendance):
    punches = [
        PunchImport("GHOST", datetime(2024, 1, 15, 8, 0), ScanAction.CLOCK_IN),
        PunchImport("WKR002", datetime(2024, 1, 15, 8, 5), ScanAction.CLOCK_OUT),
        PunchImport("WKR003", datetime(2024, 1, 15, 8, 10), ScanAction.CLOCK_IN),
    ]
    result = attendance.import_punches(punches)

    assert result.imported == 1
    assert result.failed == 2
    assert any("GHOST" in e for e in result.errors)
    assert any("no clock-in record" in e for e in result.errors)
