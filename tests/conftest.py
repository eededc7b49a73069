from __future__ import annotations

from datetime import datetime

import pytest

from attendance_payroll.container import build_container
from attendance_payroll.core.enums import WageType, WorkerStatus
from attendance_payroll.core.settings import EngineSettings
from attendance_payroll.workers.model import WageConfig, Worker

from tests.factories import make_worker


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 8, 30, 0)


@pytest.fixture
def settings() -> EngineSettings:
    # statutory items off so gross/net arithmetic stays readable
    return EngineSettings(
        pf_enabled=False,
        esi_enabled=False,
        professional_tax_enabled=False,
        income_tax_enabled=False,
    )


@pytest.fixture
def workers() -> list[Worker]:
    return [
        make_worker("WKR001", name="Rajesh Kumar", wage=WageConfig(wage_type=WageType.DAILY, daily_rate=500)),
        make_worker("WKR002", department="Electrical", employment_type="contract",
                    wage=WageConfig(wage_type=WageType.HOURLY, hourly_rate=80)),
        make_worker("WKR003", department="Plumbing", employment_type="part-time",
                    wage=WageConfig(wage_type=WageType.FIXED, fixed_salary=22000)),
        make_worker("WKR004", status=WorkerStatus.SUSPENDED),
    ]


@pytest.fixture
def container(settings, workers):
    return build_container(settings=settings, workers=workers)


@pytest.fixture
def attendance(container):
    return container.attendance_service
