from __future__ import annotations

from ...core.settings import EngineSettings
from ...reports.model import AttendanceSummary
from ...workers.model import WageConfig
from ..model import GrossPay
from .base import WageCalculator


class HourlyWageCalculator(WageCalculator):
    """Regular hours at the hourly rate; hours above the standard day at the multiplier."""

    def gross_pay(self, wage: WageConfig, summary: AttendanceSummary, settings: EngineSettings) -> GrossPay:
        if not wage.overtime_enabled:
            return GrossPay(base_pay=wage.hourly_rate * summary.total_hours, overtime_pay=0.0)

        rate = wage.overtime_rate
        if rate is None:
            rate = wage.hourly_rate * settings.overtime_multiplier
        regular = max(0.0, summary.total_hours - summary.overtime_hours)
        return GrossPay(
            base_pay=wage.hourly_rate * regular,
            overtime_pay=rate * summary.overtime_hours,
            overtime_rate=rate,
        )
