from datetime import date, datetime, time

import pytest

from attendance_payroll.attendance.forms import ManualEntryForm
from attendance_payroll.attendance.model import AttendancePeriod
from attendance_payroll.core.enums import AttendanceStatus, PaymentStatus, WageType
from attendance_payroll.core.exceptions import DerivationFailure
from attendance_payroll.core.settings import EngineSettings
from attendance_payroll.payroll.ledger import Advance, Deduction
from attendance_payroll.payroll.service import PayrollService
from attendance_payroll.workers.model import WageConfig
from tests.factories import make_worker

JANUARY = AttendancePeriod(date(2024, 1, 1), date(2024, 1, 31))
NOW = datetime(2024, 2, 1, 10, 0)


def _work_days(attendance, worker_id, days, *, clock_out=time(17, 0)):
    for d in days:
        attendance.record_manual_entry(
            ManualEntryForm(
                worker_id=worker_id,
                work_date=date(2024, 1, d),
                status=AttendanceStatus.PRESENT,
                clock_in_time=time(9, 0),
                clock_out_time=clock_out,
            ),
            now=NOW,
        )


def test_daily_worker_payslip(container):
    _work_days(container.attendance_service, "WKR001", range(1, 20))
    _work_days(container.attendance_service, "WKR001", [20], clock_out=time(18, 15))

    result = container.payroll_service.run_payroll(["WKR001"], JANUARY, now=NOW)

    assert not result.failed
    payment = result.succeeded[0]
    assert payment.paid_days == 20
    assert payment.overtime_hours == 1.25
    assert payment.gross_pay == pytest.approx(500 * 20 + 1.25 * 62.5 * 1.5, abs=0.01)
    assert payment.net_pay == payment.gross_pay
    assert payment.payment_status == PaymentStatus.PENDING
    assert payment.due_date == date(2024, 2, 7)


def test_net_pay_subtracts_deductions_and_advances(container):
    _work_days(container.attendance_service, "WKR001", range(1, 11))
    container.ledger.add_advance(Advance("adv-1", "WKR001", 1000, date(2023, 12, 20)))
    container.ledger.add_advance(Advance("adv-2", "WKR001", 700, date(2024, 2, 5)))
    container.ledger.add_deduction(Deduction("ded-1", "WKR001", 150, date(2024, 1, 10), kind="late_penalty"))

    payment = container.payroll_service.run_payroll(["WKR001"], JANUARY, now=NOW).succeeded[0]

    assert payment.gross_pay == 5000
    assert payment.advances == 1000
    assert payment.deductions == 150
    assert payment.net_pay == pytest.approx(payment.gross_pay - payment.deductions - payment.advances)


def test_statutory_deductions_follow_settings(container):
    settings = EngineSettings(pf_enabled=True, esi_enabled=True, professional_tax_enabled=True)
    service = PayrollService(
        container.report_service, container.workers_repo, container.ledger, container.payments_repo, settings=settings
    )
    _work_days(container.attendance_service, "WKR001", range(1, 21))

    payment = service.run_payroll(["WKR001"], JANUARY, now=NOW).succeeded[0]

    kinds = {line.kind: line.amount for line in payment.deduction_items}
    assert kinds == {"provident_fund": 1200.0, "state_insurance": 75.0, "professional_tax": 200.0}
    assert payment.net_pay == pytest.approx(10000 - 1475)


def test_negative_net_pay_is_kept_with_warning(container):
    _work_days(container.attendance_service, "WKR001", [2])
    container.ledger.add_advance(Advance("adv-1", "WKR001", 2000, date(2024, 1, 5)))

    payment = container.payroll_service.run_payroll(["WKR001"], JANUARY, now=NOW).succeeded[0]

    assert payment.net_pay == -1500
    assert any("negative" in w for w in payment.warnings)


def test_one_bad_worker_does_not_stop_the_batch(container):
    container.workers_repo.upsert(make_worker("WKR005", wage=WageConfig(wage_type=WageType.DAILY, daily_rate=0)))
    _work_days(container.attendance_service, "WKR002", range(1, 6))

    result = container.payroll_service.run_payroll(["WKR004", "WKR005", "GHOST", "WKR002"], JANUARY, now=NOW)

    assert [p.worker_id for p in result.succeeded] == ["WKR002"]
    reasons = {f.worker_id: f.reason for f in result.failed}
    assert reasons["WKR004"] == "missing wage configuration"
    assert reasons["WKR005"] == "no daily wage amount specified"
    assert reasons["GHOST"] == "worker not found in roster"
    assert container.payments_repo.get("WKR002", JANUARY) is not None


def test_derive_payment_rejects_missing_wage(container):
    worker = make_worker("WKR009")
    summary = container.report_service.period_summary("WKR009", JANUARY)

    with pytest.raises(DerivationFailure) as exc:
        container.payroll_service.derive_payment(worker, None, summary, now=NOW)
    assert exc.value.worker_id == "WKR009"


def test_rerun_replaces_pending_payment_in_place(container):
    _work_days(container.attendance_service, "WKR002", range(1, 3))
    first = container.payroll_service.run_payroll(["WKR002"], JANUARY, now=NOW).succeeded[0]

    _work_days(container.attendance_service, "WKR002", [3])
    second = container.payroll_service.run_payroll(["WKR002"], JANUARY, now=datetime(2024, 2, 2)).succeeded[0]

    assert second.payment_id == first.payment_id
    assert second.created_at == first.created_at
    assert second.gross_pay == pytest.approx(80 * 24)
    assert len(container.payments_repo.list_all()) == 1


def test_rerun_after_payment_is_refused(container):
    _work_days(container.attendance_service, "WKR002", range(1, 3))
    container.payroll_service.run_payroll(["WKR002"], JANUARY, now=NOW)
    container.payroll_service.mark_paid("WKR002", JANUARY, now=NOW)

    result = container.payroll_service.run_payroll(["WKR002"], JANUARY, now=NOW)

    assert not result.succeeded
    assert "paid" in result.failed[0].reason


def test_fixed_salary_is_reduced_by_days_without_records(container):
    _work_days(container.attendance_service, "WKR003", [2, 3, 4, 5, 8])

    payment = container.payroll_service.run_payroll(["WKR003"], JANUARY, now=NOW).succeeded[0]

    assert payment.paid_days == 5
    assert payment.gross_pay == pytest.approx(22000 * 5 / 23, abs=0.01)
