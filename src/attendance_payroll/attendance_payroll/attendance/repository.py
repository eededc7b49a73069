from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Single append/update table keyed by (worker_id, work_date)."""

    def get(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_worker_and_date(self, worker_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> None:
        """Store a new record; a second record for the same key is an invariant violation."""

        raise NotImplementedError

    def replace(self, record: AttendanceRecord) -> None:
        """Whole-record replace of an existing record (same id, same key)."""

        raise NotImplementedError

    def delete(self, record_id: str) -> bool:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_worker(self, worker_id: str, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def snapshot(self) -> Sequence[AttendanceRecord]:
        """Consistent copy of every record, safe to read while writers continue."""

        raise NotImplementedError
