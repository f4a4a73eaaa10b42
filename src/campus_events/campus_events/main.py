from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import json_ok, register_error_handlers
from .common.logging_config import configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, describe_target, list_tables
from .events.controller import register as register_events
from .feedback.controller import register as register_feedback
from .registrations.controller import register as register_registrations
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _load_settings(overrides: Optional[Mapping[str, Any]]) -> dict:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {
        "SETTINGS_MODULE": settings_module,
        "SECRET_KEY": getattr(settings, "SECRET_KEY"),
        "DB_CONFIG": getattr(settings, "DB_CONFIG"),
        "DEBUG": bool(getattr(settings, "DEBUG", False)),
        "ADMIN_TOKEN": getattr(settings, "ADMIN_TOKEN", ""),
        "LOG_LEVEL": getattr(settings, "LOG_LEVEL", "INFO"),
        "AUTO_INIT_DB": bool(getattr(settings, "AUTO_INIT_DB", False)),
        "AUTO_SEED_DB": bool(getattr(settings, "AUTO_SEED_DB", False)),
        "PUBLIC_BASE_URL": getattr(settings, "PUBLIC_BASE_URL", ""),
        "CORS_ORIGINS": getattr(settings, "CORS_ORIGINS", "*"),
    }
    if overrides:
        values.update(overrides)
    return values


def _cors_origins(value):
    if isinstance(value, str):
        value = [o.strip() for o in value.split(",") if o.strip()]
    origins = list(value or [])
    return "*" if "*" in origins else origins


def create_app(settings_override: Optional[Mapping[str, Any]] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_override)
    configure_logging(settings["LOG_LEVEL"])

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = settings["DEBUG"]
    app.config["ADMIN_TOKEN"] = settings["ADMIN_TOKEN"]
    app.config["PUBLIC_BASE_URL"] = settings["PUBLIC_BASE_URL"]
    CORS(app, resources={r"/api/*": {"origins": _cors_origins(settings["CORS_ORIGINS"])}})

    db_config = settings["DB_CONFIG"]
    if container is None:
        logger.info("settings=%s db=%s", settings["SETTINGS_MODULE"], describe_target(db_config))
        if settings["AUTO_INIT_DB"]:
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if settings["AUTO_SEED_DB"]:
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
        container = build_container(db_config=db_config, public_base_url=settings["PUBLIC_BASE_URL"])

    app.extensions["campus_events"] = container

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return json_ok(200, status="ok")

    register_events(app, container)
    register_registrations(app, container)
    register_attendance(app, container)
    register_feedback(app, container)
    register_reports(app, container)
    register_error_handlers(app)

    return app
