from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .geofences.controller import register as register_geofences
from .shifts.controller import register as register_shifts
from .violations.controller import register as register_violations

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> Flask:
    """Application factory.

    ``container`` replaces the MySQL-backed wiring, e.g. with in-memory
    repositories in tests; the schema bootstrap is skipped in that case.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            grace_minutes=int(getattr(settings, "GRACE_PERIOD_MINUTES", 20)),
            early_departure_tolerance_minutes=int(getattr(settings, "EARLY_DEPARTURE_TOLERANCE_MINUTES", 15)),
            sequence_policy=getattr(settings, "PUNCH_SEQUENCE_POLICY", "warn"),
            station_id=getattr(settings, "STATION_ID", None),
        )

    register_attendance(app, container)
    register_geofences(app, container)
    register_shifts(app, container)
    register_violations(app, container)

    return app
