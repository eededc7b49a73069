from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from types import ModuleType

from ..common.datetime_utils import parse_hhmm
from . import constants


@dataclass(frozen=True)
class EngineSettings:
    """Business rule knobs shared by attendance and payroll.

    Standard hours and the overtime multiplier live here only, so duration
    math and pay math can never disagree on them.
    """

    standard_hours: float = constants.DEFAULT_STANDARD_HOURS
    overtime_multiplier: float = constants.DEFAULT_OVERTIME_MULTIPLIER
    workday_start: time = time(9, 0)
    workday_end: time = time(17, 0)
    late_grace_minutes: int = constants.DEFAULT_LATE_GRACE_MINUTES

    pf_enabled: bool = True
    pf_employee_rate: float = constants.DEFAULT_PF_EMPLOYEE_RATE
    esi_enabled: bool = True
    esi_employee_rate: float = constants.DEFAULT_ESI_EMPLOYEE_RATE
    professional_tax_enabled: bool = True
    professional_tax_amount: float = constants.DEFAULT_PROFESSIONAL_TAX_AMOUNT
    income_tax_enabled: bool = False
    income_tax_rate: float = constants.DEFAULT_INCOME_TAX_RATE

    payment_due_days: int = constants.DEFAULT_PAYMENT_DUE_DAYS

    @classmethod
    def from_module(cls, settings: ModuleType) -> "EngineSettings":
        """Build settings from a `config.<env>` module; missing names keep defaults."""

        def get(name: str, default):
            return getattr(settings, name, default)

        return cls(
            standard_hours=float(get("STANDARD_HOURS", constants.DEFAULT_STANDARD_HOURS)),
            overtime_multiplier=float(get("OVERTIME_MULTIPLIER", constants.DEFAULT_OVERTIME_MULTIPLIER)),
            workday_start=parse_hhmm(str(get("WORKDAY_START", constants.DEFAULT_WORKDAY_START))),
            workday_end=parse_hhmm(str(get("WORKDAY_END", constants.DEFAULT_WORKDAY_END))),
            late_grace_minutes=int(get("LATE_GRACE_MINUTES", constants.DEFAULT_LATE_GRACE_MINUTES)),
            pf_enabled=bool(get("PF_ENABLED", True)),
            pf_employee_rate=float(get("PF_EMPLOYEE_RATE", constants.DEFAULT_PF_EMPLOYEE_RATE)),
            esi_enabled=bool(get("ESI_ENABLED", True)),
            esi_employee_rate=float(get("ESI_EMPLOYEE_RATE", constants.DEFAULT_ESI_EMPLOYEE_RATE)),
            professional_tax_enabled=bool(get("PROFESSIONAL_TAX_ENABLED", True)),
            professional_tax_amount=float(get("PROFESSIONAL_TAX_AMOUNT", constants.DEFAULT_PROFESSIONAL_TAX_AMOUNT)),
            income_tax_enabled=bool(get("INCOME_TAX_ENABLED", False)),
            income_tax_rate=float(get("INCOME_TAX_RATE", constants.DEFAULT_INCOME_TAX_RATE)),
            payment_due_days=int(get("PAYMENT_DUE_DAYS", constants.DEFAULT_PAYMENT_DUE_DAYS)),
        )
