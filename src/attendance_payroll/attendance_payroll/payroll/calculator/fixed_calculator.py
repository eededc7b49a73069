from __future__ import annotations

from ...core.settings import EngineSettings
from ...reports.model import AttendanceSummary
from ...workers.model import WageConfig
from ..model import GrossPay
from .base import WageCalculator


class FixedSalaryCalculator(WageCalculator):
    """Flat salary, pro-rated down (never up) by paid days over scheduled working days.

    Scheduled days are calendar weekdays, so a day with no record at all
    still reduces the salary.
    """

    def gross_pay(self, wage: WageConfig, summary: AttendanceSummary, settings: EngineSettings) -> GrossPay:
        scheduled = summary.scheduled_working_days
        if scheduled == 0:
            return GrossPay(
                base_pay=wage.fixed_salary,
                overtime_pay=0.0,
                warnings=("no working days in period; fixed salary not pro-rated",),
            )

        base = wage.fixed_salary
        if summary.paid_days < scheduled:
            base = wage.fixed_salary * summary.paid_days / scheduled

        if not wage.overtime_enabled:
            return GrossPay(base_pay=base, overtime_pay=0.0)

        rate = wage.overtime_rate
        if rate is None:
            rate = wage.fixed_salary / (scheduled * settings.standard_hours) * settings.overtime_multiplier
        return GrossPay(base_pay=base, overtime_pay=rate * summary.overtime_hours, overtime_rate=rate)
