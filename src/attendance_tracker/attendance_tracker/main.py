from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .attendance.scheduler import start_scheduler
from .container import Container, build_container
from .core.constants import DEFAULT_USER_ID
from .database.bootstrap import apply_schema, list_tables, missing_tables
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_USER_ID"] = str(getattr(settings, "DEFAULT_USER_ID", DEFAULT_USER_ID))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            tables = list_tables(db_config)
            missing = missing_tables(tables)
            if missing:
                logger.warning("schema applied but tables missing: %s", ", ".join(missing))
            else:
                logger.info("schema ready (tables=%d)", len(tables))
        container = build_container(db_config=db_config)

    app.extensions["attendance_container"] = container
    register_attendance(app, container)
    register_reports(app, container)

    if bool(getattr(settings, "AUTO_CLOSE_ENABLED", False)):
        app.extensions["attendance_scheduler"] = start_scheduler(container.attendance_service)

    return app
