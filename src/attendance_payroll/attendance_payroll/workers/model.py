from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import PaymentMethod, WageType, WorkerStatus


@dataclass(frozen=True)
class WageConfig:
    """How a worker is paid.

    Only the rate matching `wage_type` is read. `overtime_rate` overrides the
    derived hourly overtime rate when set.
    """

    wage_type: WageType
    daily_rate: float = 0.0
    hourly_rate: float = 0.0
    fixed_salary: float = 0.0
    overtime_enabled: bool = True
    overtime_rate: Optional[float] = None


@dataclass(frozen=True)
class Worker:
    """Roster entry as supplied by the worker directory."""

    worker_id: str
    employee_id: str
    name: str
    status: WorkerStatus
    department: str
    employment_type: str
    project_id: Optional[str] = None
    wage_config: Optional[WageConfig] = None
    payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER

    @property
    def is_active(self) -> bool:
        return self.status == WorkerStatus.ACTIVE
