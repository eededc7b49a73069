from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Protocol

from ..attendance.model import AttendancePeriod


@dataclass(frozen=True)
class Advance:
    advance_id: str
    worker_id: str
    amount: float
    date: date
    reason: str = ""
    status: str = "approved"


@dataclass(frozen=True)
class Deduction:
    """Ad-hoc deduction (late penalty, loan instalment, ...) dated within a period."""

    deduction_id: str
    worker_id: str
    amount: float
    date: date
    kind: str = "other"
    description: str = ""


@dataclass(frozen=True)
class Outstanding:
    advances: tuple[Advance, ...] = ()
    deductions: tuple[Deduction, ...] = ()


class AdvanceLedger(Protocol):
    def get_outstanding(self, worker_id: str, period: AttendancePeriod) -> Outstanding:
        raise NotImplementedError


class InMemoryAdvanceLedger(AdvanceLedger):
    """Approved advances up to the period end, deductions dated inside the period."""

    def __init__(self, advances: Iterable[Advance] = (), deductions: Iterable[Deduction] = ()):
        self._advances = list(advances)
        self._deductions = list(deductions)

    def add_advance(self, advance: Advance) -> None:
        self._advances.append(advance)

    def add_deduction(self, deduction: Deduction) -> None:
        self._deductions.append(deduction)

    def get_outstanding(self, worker_id: str, period: AttendancePeriod) -> Outstanding:
        advances = tuple(
            a for a in self._advances
            if a.worker_id == worker_id and a.status == "approved" and a.date <= period.end_date
        )
        deductions = tuple(
            d for d in self._deductions
            if d.worker_id == worker_id and period.contains(d.date)
        )
        return Outstanding(advances=advances, deductions=deductions)
