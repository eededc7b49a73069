from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.settings import EngineSettings
from ...reports.model import AttendanceSummary
from ...workers.model import WageConfig
from ..model import GrossPay


class WageCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def gross_pay(self, wage: WageConfig, summary: AttendanceSummary, settings: EngineSettings) -> GrossPay:
        raise NotImplementedError
