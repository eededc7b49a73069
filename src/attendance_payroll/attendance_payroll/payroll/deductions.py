from __future__ import annotations

from typing import Iterable

from ..attendance.timecalc import round_half_up
from ..core.settings import EngineSettings
from .ledger import Deduction
from .model import DeductionLine


def statutory_deductions(gross_pay: float, settings: EngineSettings) -> list[DeductionLine]:
    """Employee-side statutory items, each switched on or off in settings."""

    lines: list[DeductionLine] = []
    if settings.pf_enabled:
        lines.append(DeductionLine("provident_fund", round_half_up(gross_pay * settings.pf_employee_rate / 100),
                                   f"PF employee share {settings.pf_employee_rate}%"))
    if settings.esi_enabled:
        lines.append(DeductionLine("state_insurance", round_half_up(gross_pay * settings.esi_employee_rate / 100),
                                   f"ESI employee share {settings.esi_employee_rate}%"))
    if settings.professional_tax_enabled:
        lines.append(DeductionLine("professional_tax", round_half_up(settings.professional_tax_amount), "Professional tax"))
    if settings.income_tax_enabled:
        lines.append(DeductionLine("income_tax", round_half_up(gross_pay * settings.income_tax_rate / 100),
                                   f"Income tax {settings.income_tax_rate}%"))
    return lines


def adhoc_deductions(items: Iterable[Deduction]) -> list[DeductionLine]:
    return [DeductionLine(d.kind, round_half_up(d.amount), d.description) for d in items]
