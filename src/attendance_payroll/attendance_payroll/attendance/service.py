from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.locks import KeyedLocks
from ..common.validators import require_enum
from ..core.enums import AttendanceStatus, EntryMethod, ScanAction
from ..core.exceptions import RecordNotFound, ValidationError
from ..core.settings import EngineSettings
from ..workers.model import Worker
from ..workers.repository import WorkerDirectory
from .admission import can_scan
from .factory import AttendanceStrategyFactory
from .forms import ManualEntryForm, RecordPatch, declare, manual_entry
from .model import AttendanceEntry, AttendanceRecord, Location
from .qr import build_qr_payload, parse_qr_payload
from .repository import AttendanceRepository
from .timecalc import compute_hours, compute_overtime

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """What a scan did: the stored record, or the reason it was refused."""

    action: ScanAction
    record: Optional[AttendanceRecord]
    reason: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.reason is None


@dataclass(frozen=True)
class MarkAllResult:
    created: int
    skipped: int
    skipped_worker_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class PunchImport:
    worker_id: str
    timestamp: datetime
    action: ScanAction
    project_id: Optional[str] = None


@dataclass(frozen=True)
class ImportResult:
    imported: int
    failed: int
    errors: tuple[str, ...] = ()


def _new_record_id() -> str:
    return f"att-{uuid.uuid4().hex[:12]}"


class AttendanceService:
    """Lifecycle of a worker's daily record.

    NoRecord -> ClockedIn -> ClockedOut through scans, NoRecord -> Declared
    through manual entry. ClockedOut and Declared only change through
    edit_record. Every write holds the (worker_id, work_date) lock.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        workers: WorkerDirectory,
        *,
        settings: Optional[EngineSettings] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        locks: Optional[KeyedLocks] = None,
        id_factory: Callable[[], str] = _new_record_id,
    ):
        self._attendance = attendance
        self._workers = workers
        self._settings = settings or EngineSettings()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._locks = locks or KeyedLocks()
        self._new_id = id_factory

    # -- scans -----------------------------------------------------------

    def scan(
        self,
        qr_payload: str,
        action: ScanAction | str | None = None,
        *,
        now: Optional[datetime] = None,
        project_id: Optional[str] = None,
        location: Optional[Location] = None,
        method: EntryMethod = EntryMethod.QR_SCAN,
    ) -> ScanResult:
        payload = parse_qr_payload(qr_payload)
        return self.punch(
            payload.worker_id,
            action,
            now=now,
            project_id=project_id,
            location=location,
            method=method,
        )

    def punch(
        self,
        worker_id: str,
        action: ScanAction | str | None = None,
        *,
        now: Optional[datetime] = None,
        project_id: Optional[str] = None,
        location: Optional[Location] = None,
        method: EntryMethod = EntryMethod.QR_SCAN,
        verified_by: Optional[str] = None,
    ) -> ScanResult:
        """Apply one clock event for a worker, gated by admission control."""

        now = now or now_local()
        if action is not None:
            action = require_enum(ScanAction, action, "action")
        worker = self._require_worker(worker_id)
        today = now.date()

        with self._locks.hold((worker.worker_id, today)):
            record = self._attendance.get_for_worker_and_date(worker.worker_id, today)
            if action is None:
                action = ScanAction.CLOCK_OUT if record is not None and record.is_clocked_in else ScanAction.CLOCK_IN

            decision = can_scan(record, action, worker.status)
            if not decision.allowed:
                log.warning("%s denied for %s on %s: %s", action.value, worker.worker_id, today, decision.reason)
                return ScanResult(action=action, record=record, reason=decision.reason)

            entry = AttendanceEntry(timestamp=now, method=method, location=location, verified_by=verified_by)
            if action == ScanAction.CLOCK_IN:
                record = self._clock_in(worker, entry, project_id=project_id)
            else:
                record = self._clock_out(record, entry)

        return ScanResult(action=action, record=record)

    def _clock_in(self, worker: Worker, entry: AttendanceEntry, *, project_id: Optional[str]) -> AttendanceRecord:
        now = entry.timestamp
        strategy = self._factory.for_checkin(
            now=now,
            workday_start=self._settings.workday_start,
            grace_minutes=self._settings.late_grace_minutes,
        )
        decision = strategy.decide_checkin(
            now=now,
            workday_start=self._settings.workday_start,
            grace_minutes=self._settings.late_grace_minutes,
        )

        record = AttendanceRecord(
            record_id=self._new_id(),
            worker_id=worker.worker_id,
            employee_id=worker.employee_id,
            work_date=now.date(),
            status=decision.status,
            created_at=now,
            updated_at=now,
            clock_in=entry,
            project_id=project_id or worker.project_id,
            department=worker.department,
            employment_type=worker.employment_type,
            notes=decision.note,
        )
        self._attendance.insert(record)
        log.info("%s clocked in at %s (%s)", worker.worker_id, now.isoformat(), record.status.value)
        return record

    def _clock_out(self, record: AttendanceRecord, entry: AttendanceEntry) -> AttendanceRecord:
        now = entry.timestamp
        total = compute_hours(record.clock_in.timestamp, now)
        overtime = compute_overtime(total, self._settings.standard_hours)

        strategy = self._factory.for_checkout(now=now, current_status=record.status)
        decision = strategy.decide_checkout(now=now, current=record.status)

        updated = replace(
            record,
            clock_out=entry,
            total_hours=total,
            overtime_hours=overtime if overtime > 0 else None,
            status=decision.status,
            updated_at=now,
        )
        self._attendance.replace(updated)
        log.info("%s clocked out at %s after %.2f h", record.worker_id, now.isoformat(), total)
        return updated

    def import_punches(self, punches: Iterable[PunchImport]) -> ImportResult:
        """Replay externally captured punches in time order; failures never stop the batch."""

        imported = 0
        errors: list[str] = []
        for p in sorted(punches, key=lambda p: p.timestamp):
            label = f"{p.worker_id} @ {p.timestamp.isoformat()}"
            try:
                result = self.punch(
                    p.worker_id,
                    p.action,
                    now=p.timestamp,
                    project_id=p.project_id,
                    method=EntryMethod.IMPORTED,
                )
            except ValidationError as e:
                errors.append(f"{label}: {e}")
                continue
            if result.allowed:
                imported += 1
            else:
                errors.append(f"{label}: {result.reason}")

        log.info("punch import finished: %d imported, %d failed", imported, len(errors))
        return ImportResult(imported=imported, failed=len(errors), errors=tuple(errors))

    # -- declarations ----------------------------------------------------

    def record_manual_entry(self, form: ManualEntryForm, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        worker = self._require_worker(form.worker_id)

        with self._locks.hold((worker.worker_id, form.work_date)):
            if self._attendance.get_for_worker_and_date(worker.worker_id, form.work_date):
                raise ValidationError(
                    f"attendance already recorded for {worker.worker_id} on {form.work_date.isoformat()}; "
                    "edit the existing record instead"
                )
            record = self._declared_record(worker, form, now=now)
            self._attendance.insert(record)

        log.info("manual %s entry for %s on %s", record.status.value, worker.worker_id, form.work_date)
        return record

    def mark_all_present(
        self,
        work_date: date,
        roster: Optional[Iterable[str]] = None,
        *,
        now: Optional[datetime] = None,
        verified_by: str = "bulk",
    ) -> MarkAllResult:
        """Mark every active rostered worker without a record as present.

        Workers who already have any record for the day are skipped, never
        overwritten.
        """

        now = now or now_local()
        if roster is None:
            worker_ids = [w.worker_id for w in self._workers.list_active()]
        else:
            worker_ids = list(dict.fromkeys(roster))

        created = 0
        skipped: list[str] = []
        for worker_id in worker_ids:
            worker = self._workers.get_worker(worker_id)
            if worker is None or not worker.is_active:
                skipped.append(worker_id)
                continue

            form = ManualEntryForm(
                worker_id=worker_id,
                work_date=work_date,
                status=AttendanceStatus.PRESENT,
                clock_in_time=self._settings.workday_start,
                clock_out_time=self._settings.workday_end,
                verified_by=verified_by,
                notes="marked present in bulk",
            )
            with self._locks.hold((worker_id, work_date)):
                if self._attendance.get_for_worker_and_date(worker_id, work_date):
                    skipped.append(worker_id)
                    continue
                self._attendance.insert(self._declared_record(worker, form, now=now))
                created += 1

        log.info("mark-all-present %s: %d created, %d skipped", work_date, created, len(skipped))
        return MarkAllResult(created=created, skipped=len(skipped), skipped_worker_ids=tuple(skipped))

    def _declared_record(self, worker: Worker, form: ManualEntryForm, *, now: datetime) -> AttendanceRecord:
        location = Location(project_site=form.project_id) if form.project_id else None
        clock_in = None
        clock_out = None
        if form.clock_in_time is not None:
            clock_in = manual_entry(form.work_date, form.clock_in_time, verified_by=form.verified_by, notes=form.notes, location=location)
        if form.clock_out_time is not None:
            clock_out = manual_entry(form.work_date, form.clock_out_time, verified_by=form.verified_by, notes=form.notes, location=location)

        fields = declare(
            status=form.status,
            clock_in=clock_in,
            clock_out=clock_out,
            leave_type=form.leave_type,
            half_day_type=form.half_day_type,
            standard_hours=self._settings.standard_hours,
        )
        return AttendanceRecord(
            record_id=self._new_id(),
            worker_id=worker.worker_id,
            employee_id=worker.employee_id,
            work_date=form.work_date,
            status=fields.status,
            created_at=now,
            updated_at=now,
            clock_in=fields.clock_in,
            clock_out=fields.clock_out,
            total_hours=fields.total_hours,
            overtime_hours=fields.overtime_hours,
            leave_type=fields.leave_type,
            half_day_type=fields.half_day_type,
            project_id=form.project_id or worker.project_id,
            department=worker.department,
            employment_type=worker.employment_type,
            notes=form.notes,
        )

    # -- administration --------------------------------------------------

    def edit_record(self, record_id: str, patch: RecordPatch, *, now: Optional[datetime] = None) -> AttendanceRecord:
        """Replace the mutable fields of a record, re-running creation validations.

        A patch that changes nothing leaves the stored record untouched, so
        re-submitting an edit is a no-op.
        """

        now = now or now_local()
        current = self.get_record(record_id)

        with self._locks.hold(current.key):
            current = self.get_record(record_id)
            status = patch.status or current.status
            fields = declare(
                status=status,
                clock_in=_patched_entry(current.work_date, current.clock_in, patch.clock_in_time, patch.edited_by),
                clock_out=_patched_entry(current.work_date, current.clock_out, patch.clock_out_time, patch.edited_by),
                leave_type=patch.leave_type if patch.leave_type is not None else current.leave_type,
                half_day_type=patch.half_day_type if patch.half_day_type is not None else current.half_day_type,
                standard_hours=self._settings.standard_hours,
                open_shift=current.is_clocked_in and patch.clock_out_time is None,
            )
            candidate = replace(
                current,
                status=fields.status,
                clock_in=fields.clock_in,
                clock_out=fields.clock_out,
                total_hours=fields.total_hours,
                overtime_hours=fields.overtime_hours,
                leave_type=fields.leave_type,
                half_day_type=fields.half_day_type,
                project_id=patch.project_id or current.project_id,
                notes=patch.notes if patch.notes is not None else current.notes,
            )
            if candidate == current:
                return current

            updated = replace(candidate, updated_at=now)
            self._attendance.replace(updated)

        log.info("record %s edited (%s -> %s)", record_id, current.status.value, updated.status.value)
        return updated

    def delete_record(self, record_id: str) -> None:
        record = self.get_record(record_id)
        with self._locks.hold(record.key):
            if not self._attendance.delete(record_id):
                raise RecordNotFound(f"attendance record {record_id} not found")
        log.info("record %s for %s on %s deleted", record_id, record.worker_id, record.work_date)

    def get_record(self, record_id: str) -> AttendanceRecord:
        record = self._attendance.get(record_id)
        if record is None:
            raise RecordNotFound(f"attendance record {record_id} not found")
        return record

    def get_today_record(self, worker_id: str, today: date) -> Optional[AttendanceRecord]:
        """Get today's attendance record for a worker"""
        return self._attendance.get_for_worker_and_date(worker_id, today)

    def list_worker_records(self, worker_id: str, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_worker(worker_id, start_date=start_date, end_date=end_date)

    def qr_payload_for(self, worker_id: str, *, project_name: Optional[str] = None, now: Optional[datetime] = None) -> str:
        worker = self._require_worker(worker_id)
        return build_qr_payload(worker, project_name=project_name, now=now or now_local())

    def _require_worker(self, worker_id: str) -> Worker:
        worker = self._workers.get_worker(worker_id)
        if not worker:
            raise ValidationError(f"worker {worker_id} not found in system")
        return worker


def _patched_entry(
    work_date: date,
    existing: Optional[AttendanceEntry],
    new_time,
    edited_by: Optional[str],
) -> Optional[AttendanceEntry]:
    if new_time is None:
        return existing
    timestamp = datetime.combine(work_date, new_time)
    if existing is not None and existing.timestamp == timestamp:
        return existing
    return manual_entry(
        work_date,
        new_time,
        verified_by=edited_by,
        location=existing.location if existing else None,
    )
