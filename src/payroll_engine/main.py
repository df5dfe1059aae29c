from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .config import get_settings_module
from .container import build_container
from .core.exceptions import (
    DomainError,
    NegativeNetPayError,
    NoActivePolicyError,
    NotFoundError,
    PayrollLockedError,
    PeriodClosedError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables

from .attendance.controller import register as register_attendance
from .payroll.controller import register as register_payroll
from .policy.controller import register as register_policy

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def _status_for(exc: DomainError) -> int:
    if isinstance(exc, (ValidationError, NegativeNetPayError)):
        return 422
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, (NoActivePolicyError, PeriodClosedError, PayrollLockedError)):
        return 409
    return 400


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    storage_backend = getattr(settings, "STORAGE_BACKEND", "memory")
    db_config = getattr(settings, "DB_CONFIG", {})
    logger.info("settings=%s storage=%s", settings_module, storage_backend)

    container = build_container(
        storage_backend=storage_backend,
        db_config=db_config,
        grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", 0)),
        max_workers=int(getattr(settings, "PAYROLL_MAX_WORKERS", 4)),
    )

    if container.conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

    app.extensions["payroll_container"] = container

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = _status_for(exc)
        if status >= 409:
            logger.warning("%s: %s", exc.kind, exc)
        return jsonify({"error": exc.to_dict()}), status

    register_policy(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    return app
