from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_repository import InMemoryAttendanceRepository
from .attendance.service import AttendanceService
from .common.locks import KeyedLocks
from .core.settings import EngineSettings
from .payroll.ledger import InMemoryAdvanceLedger
from .payroll.repository import InMemoryPaymentRepository
from .payroll.service import PayrollService
from .reports.service import ReportService
from .workers.model import Worker
from .workers.repository import InMemoryWorkerDirectory


@dataclass(frozen=True)
class Container:
    settings: EngineSettings

    workers_repo: InMemoryWorkerDirectory
    attendance_repo: InMemoryAttendanceRepository
    payments_repo: InMemoryPaymentRepository
    ledger: InMemoryAdvanceLedger

    attendance_service: AttendanceService
    report_service: ReportService
    payroll_service: PayrollService


def build_container(*, settings: Optional[EngineSettings] = None, workers: Iterable[Worker] = ()) -> Container:
    settings = settings or EngineSettings()

    workers_repo = InMemoryWorkerDirectory(workers)
    attendance_repo = InMemoryAttendanceRepository()
    payments_repo = InMemoryPaymentRepository()
    ledger = InMemoryAdvanceLedger()

    attendance_service = AttendanceService(
        attendance_repo,
        workers_repo,
        settings=settings,
        strategy_factory=AttendanceStrategyFactory(),
        locks=KeyedLocks(),
    )
    report_service = ReportService(attendance_repo, workers_repo)
    payroll_service = PayrollService(report_service, workers_repo, ledger, payments_repo, settings=settings)

    return Container(
        settings=settings,
        workers_repo=workers_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        ledger=ledger,
        attendance_service=attendance_service,
        report_service=report_service,
        payroll_service=payroll_service,
    )
