from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import InvariantViolation
from .model import AttendanceRecord
from .repository import AttendanceRepository

log = logging.getLogger(__name__)


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        self._lock = threading.RLock()
        self._by_id: dict[str, AttendanceRecord] = {}
        self._by_key: dict[tuple[str, date], str] = {}

    def get(self, record_id: str) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_id.get(record_id)

    def get_for_worker_and_date(self, worker_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            record_id = self._by_key.get((worker_id, work_date))
            return self._by_id.get(record_id) if record_id else None

    def insert(self, record: AttendanceRecord) -> None:
        _check_hours(record)
        with self._lock:
            if record.key in self._by_key:
                log.error("duplicate attendance record for %s on %s", record.worker_id, record.work_date)
                raise InvariantViolation(
                    f"more than one record for worker {record.worker_id} on {record.work_date.isoformat()}"
                )
            if record.record_id in self._by_id:
                raise InvariantViolation(f"record id {record.record_id} already exists")
            self._by_id[record.record_id] = record
            self._by_key[record.key] = record.record_id

    def replace(self, record: AttendanceRecord) -> None:
        _check_hours(record)
        with self._lock:
            current = self._by_id.get(record.record_id)
            if current is None:
                raise InvariantViolation(f"record id {record.record_id} does not exist")
            if current.key != record.key:
                raise InvariantViolation("a record cannot move to another worker or day")
            self._by_id[record.record_id] = record

    def delete(self, record_id: str) -> bool:
        with self._lock:
            record = self._by_id.pop(record_id, None)
            if record is None:
                return False
            self._by_key.pop(record.key, None)
            return True

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with self._lock:
            return tuple(r for r in self._by_id.values() if r.work_date == work_date)

    def list_for_worker(self, worker_id: str, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [
                r for r in self._by_id.values()
                if r.worker_id == worker_id and start_date <= r.work_date <= end_date
            ]
        items.sort(key=lambda r: r.work_date)
        return tuple(items)

    def snapshot(self) -> Sequence[AttendanceRecord]:
        with self._lock:
            return tuple(self._by_id.values())


def _check_hours(record: AttendanceRecord) -> None:
    for name in ("total_hours", "overtime_hours"):
        value = getattr(record, name)
        if value is not None and value < 0:
            log.error("negative %s on record %s", name, record.record_id)
            raise InvariantViolation(f"{name} must not be negative")
