from __future__ import annotations

import threading
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendancePeriod
from .model import PaymentRecord


class PaymentRepository(Protocol):
    """One row per (worker_id, period)."""

    def get(self, worker_id: str, period: AttendancePeriod) -> Optional[PaymentRecord]:
        raise NotImplementedError

    def save(self, record: PaymentRecord) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[PaymentRecord]:
        raise NotImplementedError


class InMemoryPaymentRepository(PaymentRepository):
    def __init__(self):
        self._lock = threading.RLock()
        self._rows: dict[tuple[str, AttendancePeriod], PaymentRecord] = {}

    def get(self, worker_id: str, period: AttendancePeriod) -> Optional[PaymentRecord]:
        with self._lock:
            return self._rows.get((worker_id, period))

    def save(self, record: PaymentRecord) -> None:
        with self._lock:
            self._rows[(record.worker_id, record.period)] = record

    def list_all(self) -> Sequence[PaymentRecord]:
        with self._lock:
            return tuple(self._rows.values())
