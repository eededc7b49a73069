from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.model import AttendancePeriod
from ..core.enums import PaymentMethod, PaymentStatus, WageType
from ..core.exceptions import InvariantViolation

NET_PAY_TOLERANCE = 0.005


@dataclass(frozen=True)
class DeductionLine:
    kind: str
    amount: float
    description: str = ""


@dataclass(frozen=True)
class GrossPay:
    base_pay: float
    overtime_pay: float
    overtime_rate: float = 0.0
    warnings: tuple[str, ...] = ()

    @property
    def total(self) -> float:
        return self.base_pay + self.overtime_pay


@dataclass(frozen=True)
class PaymentRecord:
    """Payslip for one worker and one period.

    net_pay is always gross_pay - deductions - advances; construction fails
    otherwise.
    """

    payment_id: str
    worker_id: str
    worker_name: str
    period: AttendancePeriod
    wage_type: WageType
    hours_worked: float
    overtime_hours: float
    paid_days: float
    gross_pay: float
    deductions: float
    advances: float
    net_pay: float
    payment_method: PaymentMethod
    due_date: date
    created_at: datetime
    updated_at: datetime
    deduction_items: tuple[DeductionLine, ...] = ()
    payment_status: PaymentStatus = PaymentStatus.PENDING
    amount_paid: float = 0.0
    payment_date: Optional[datetime] = None
    warnings: tuple[str, ...] = ()

    def __post_init__(self):
        expected = self.gross_pay - self.deductions - self.advances
        if abs(self.net_pay - expected) > NET_PAY_TOLERANCE:
            raise InvariantViolation(
                f"net pay {self.net_pay} != gross {self.gross_pay} - deductions {self.deductions} - advances {self.advances}"
            )

    @property
    def balance(self) -> float:
        return self.net_pay - self.amount_paid


@dataclass(frozen=True)
class PayrollFailure:
    worker_id: str
    reason: str


@dataclass(frozen=True)
class PayrollRunResult:
    succeeded: tuple[PaymentRecord, ...]
    failed: tuple[PayrollFailure, ...]
