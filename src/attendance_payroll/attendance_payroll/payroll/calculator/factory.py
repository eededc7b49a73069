from __future__ import annotations

from ...core.enums import WageType
from .base import WageCalculator
from .daily_calculator import DailyWageCalculator
from .fixed_calculator import FixedSalaryCalculator
from .hourly_calculator import HourlyWageCalculator

_CALCULATORS: dict[WageType, WageCalculator] = {
    WageType.DAILY: DailyWageCalculator(),
    WageType.HOURLY: HourlyWageCalculator(),
    WageType.FIXED: FixedSalaryCalculator(),
}


def calculator_for(wage_type: WageType) -> WageCalculator:
    return _CALCULATORS[wage_type]
