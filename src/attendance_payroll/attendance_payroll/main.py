from __future__ import annotations

import importlib
import logging
from typing import Iterable

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .core.settings import EngineSettings
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .workers.model import Worker


def create_app(*, workers: Iterable[Worker] = ()) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    log = logging.getLogger(__name__)
    log.info("attendance-payroll starting with settings=%s", settings_module)

    container = build_container(settings=EngineSettings.from_module(settings), workers=workers)
    app.extensions["attendance_payroll"] = container

    register_attendance(app, container)
    register_reports(app, container)
    register_payroll(app, container)

    return app
