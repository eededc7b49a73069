"""Duration math.

Every hour figure in the engine is derived here, with the same rounding, so
totals are reproducible.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import DEFAULT_STANDARD_HOURS
from ..core.exceptions import InvalidInterval


def round_half_up(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_hours(clock_in: datetime, clock_out: datetime) -> float:
    """Hours between two punches, rounded to 2 decimal places."""
    if clock_out <= clock_in:
        raise InvalidInterval("clock-out must be after clock-in")
    seconds = (clock_out - clock_in).total_seconds()
    return round_half_up(seconds / 3600)


def compute_overtime(total_hours: float, standard_hours: float = DEFAULT_STANDARD_HOURS) -> float:
    return round_half_up(max(0.0, total_hours - standard_hours))
