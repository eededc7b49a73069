from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendancePeriod
from ..attendance.timecalc import round_half_up
from ..common.datetime_utils import now_local
from ..core.enums import PaymentStatus
from ..core.exceptions import DerivationFailure, ValidationError
from ..core.settings import EngineSettings
from ..reports.model import AttendanceSummary
from ..reports.service import ReportService
from ..workers.model import WageConfig, Worker
from ..workers.repository import WorkerDirectory
from .calculator.factory import calculator_for
from .deductions import adhoc_deductions, statutory_deductions
from .ledger import Advance, AdvanceLedger, Deduction
from .model import PaymentRecord, PayrollFailure, PayrollRunResult
from .repository import PaymentRepository
from .status import transition

log = logging.getLogger(__name__)

_RATE_FIELD = {
    "daily": "daily_rate",
    "hourly": "hourly_rate",
    "fixed": "fixed_salary",
}


def _new_payment_id() -> str:
    return f"pay-{uuid.uuid4().hex[:12]}"


class PayrollService:
    """Derives payslips from period summaries and manages their payment status.

    Derivation only ever produces `pending`; later status moves are
    administrative calls on this service.
    """

    def __init__(
        self,
        reports: ReportService,
        workers: WorkerDirectory,
        ledger: AdvanceLedger,
        payments: PaymentRepository,
        *,
        settings: Optional[EngineSettings] = None,
    ):
        self._reports = reports
        self._workers = workers
        self._ledger = ledger
        self._payments = payments
        self._settings = settings or EngineSettings()

    def derive_payment(
        self,
        worker: Worker,
        wage_config: Optional[WageConfig],
        summary: AttendanceSummary,
        advances: Iterable[Advance] = (),
        deductions: Iterable[Deduction] = (),
        *,
        now: Optional[datetime] = None,
    ) -> PaymentRecord:
        now = now or now_local()
        _check_wage_config(worker.worker_id, wage_config)

        gross = calculator_for(wage_config.wage_type).gross_pay(wage_config, summary, self._settings)
        gross_pay = round_half_up(gross.total)

        lines = statutory_deductions(gross_pay, self._settings) + adhoc_deductions(deductions)
        total_deductions = round_half_up(sum(line.amount for line in lines))
        total_advances = round_half_up(sum(a.amount for a in advances))
        net_pay = round_half_up(gross_pay - total_deductions - total_advances)

        warnings = list(gross.warnings)
        if net_pay < 0:
            warnings.append(f"net pay is negative ({net_pay:.2f}); deductions and advances exceed gross pay")
            log.warning("negative net pay %.2f for %s in %s", net_pay, worker.worker_id, summary.period.label)

        return PaymentRecord(
            payment_id=_new_payment_id(),
            worker_id=worker.worker_id,
            worker_name=worker.name,
            period=summary.period,
            wage_type=wage_config.wage_type,
            hours_worked=summary.total_hours,
            overtime_hours=summary.overtime_hours,
            paid_days=summary.paid_days,
            gross_pay=gross_pay,
            deductions=total_deductions,
            deduction_items=tuple(lines),
            advances=total_advances,
            net_pay=net_pay,
            payment_method=worker.payment_method,
            due_date=summary.period.end_date + timedelta(days=self._settings.payment_due_days),
            created_at=now,
            updated_at=now,
            warnings=tuple(warnings),
        )

    def run_payroll(
        self,
        worker_ids: Iterable[str],
        period: AttendancePeriod,
        *,
        now: Optional[datetime] = None,
    ) -> PayrollRunResult:
        """Derive and store one payment per worker; a failing worker never stops the batch."""

        now = now or now_local()
        succeeded: list[PaymentRecord] = []
        failed: list[PayrollFailure] = []

        for worker_id in dict.fromkeys(worker_ids):
            try:
                record = self._derive_for(worker_id, period, now=now)
            except DerivationFailure as e:
                failed.append(PayrollFailure(worker_id=worker_id, reason=e.reason))
                continue
            except ValidationError as e:
                failed.append(PayrollFailure(worker_id=worker_id, reason=str(e)))
                continue
            self._payments.save(record)
            succeeded.append(record)

        log.info("payroll %s: %d succeeded, %d failed", period.label, len(succeeded), len(failed))
        return PayrollRunResult(succeeded=tuple(succeeded), failed=tuple(failed))

    generate_batch_payments = run_payroll

    def _derive_for(self, worker_id: str, period: AttendancePeriod, *, now: datetime) -> PaymentRecord:
        worker = self._workers.get_worker(worker_id)
        if worker is None:
            raise DerivationFailure(worker_id, "worker not found in roster")

        existing = self._payments.get(worker_id, period)
        if existing is not None and existing.payment_status != PaymentStatus.PENDING:
            raise DerivationFailure(worker_id, f"payment already {existing.payment_status.value}; not recomputed")

        summary = self._reports.period_summary(worker_id, period)
        outstanding = self._ledger.get_outstanding(worker_id, period)
        record = self.derive_payment(
            worker,
            worker.wage_config,
            summary,
            outstanding.advances,
            outstanding.deductions,
            now=now,
        )
        if existing is not None:
            record = replace(record, payment_id=existing.payment_id, created_at=existing.created_at)
        return record

    # -- payment status ---------------------------------------------------

    def get_payment(self, worker_id: str, period: AttendancePeriod) -> PaymentRecord:
        record = self._payments.get(worker_id, period)
        if record is None:
            raise ValidationError(f"no payment record for {worker_id} in {period.label}")
        return record

    def record_payment(
        self,
        worker_id: str,
        period: AttendancePeriod,
        amount: float,
        *,
        now: Optional[datetime] = None,
    ) -> PaymentRecord:
        """Apply a payment towards the balance: partial until the balance is settled."""

        now = now or now_local()
        if amount <= 0:
            raise ValidationError("payment amount must be positive")

        record = self.get_payment(worker_id, period)
        if record.balance <= 0:
            raise ValidationError(f"nothing left to pay for {worker_id} in {period.label}")
        if amount - record.balance > 0.005:
            raise ValidationError(f"payment {amount:.2f} exceeds the remaining balance {record.balance:.2f}")

        paid = round_half_up(record.amount_paid + amount)
        if record.net_pay - paid <= 0.005:
            updated = transition(record, PaymentStatus.PAID, now=now, amount_paid=record.net_pay, payment_date=now)
        else:
            updated = transition(record, PaymentStatus.PARTIAL, now=now, amount_paid=paid)

        self._payments.save(updated)
        log.info("payment of %.2f recorded for %s (%s)", amount, worker_id, updated.payment_status.value)
        return updated

    def mark_paid(self, worker_id: str, period: AttendancePeriod, *, now: Optional[datetime] = None) -> PaymentRecord:
        now = now or now_local()
        record = self.get_payment(worker_id, period)
        updated = transition(
            record,
            PaymentStatus.PAID,
            now=now,
            amount_paid=max(record.net_pay, record.amount_paid),
            payment_date=now,
        )
        self._payments.save(updated)
        return updated

    def mark_overdue(self, today: date, *, now: Optional[datetime] = None) -> Sequence[PaymentRecord]:
        """Move pending payments whose due date has passed to overdue."""

        now = now or now_local()
        moved = []
        for record in self._payments.list_all():
            if record.payment_status == PaymentStatus.PENDING and record.due_date < today:
                updated = transition(record, PaymentStatus.OVERDUE, now=now)
                self._payments.save(updated)
                moved.append(updated)
        if moved:
            log.info("%d payments marked overdue", len(moved))
        return moved


def _check_wage_config(worker_id: str, wage_config: Optional[WageConfig]) -> None:
    if wage_config is None:
        raise DerivationFailure(worker_id, "missing wage configuration")
    rate = getattr(wage_config, _RATE_FIELD[wage_config.wage_type.value])
    if not rate or rate <= 0:
        raise DerivationFailure(worker_id, f"no {wage_config.wage_type.value} wage amount specified")
