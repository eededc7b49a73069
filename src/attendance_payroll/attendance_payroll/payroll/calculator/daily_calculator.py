from __future__ import annotations

from ...core.settings import EngineSettings
from ...reports.model import AttendanceSummary
from ...workers.model import WageConfig
from ..model import GrossPay
from .base import WageCalculator


class DailyWageCalculator(WageCalculator):
    """Daily rate per paid day, plus overtime hours at the overtime rate."""

    def gross_pay(self, wage: WageConfig, summary: AttendanceSummary, settings: EngineSettings) -> GrossPay:
        base = wage.daily_rate * summary.paid_days
        if not wage.overtime_enabled:
            return GrossPay(base_pay=base, overtime_pay=0.0)

        rate = wage.overtime_rate
        if rate is None:
            rate = wage.daily_rate / settings.standard_hours * settings.overtime_multiplier
        return GrossPay(base_pay=base, overtime_pay=rate * summary.overtime_hours, overtime_rate=rate)
