from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .advances.controller import register as register_advances
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_admin, list_tables
from .ingestion.controller import register as register_ingestion
from .notifications.controller import register as register_notifications
from .payroll.controller import register as register_payroll
from .payslips.controller import register as register_payslips
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", 16 * 1024 * 1024))

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
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_admin(db_config)
            logger.info("demo admin ready")
        container = build_container(db_config=db_config, settings=settings)

    register_users(app, container)
    register_ingestion(app, container)
    register_reports(app, container)
    register_payroll(app, container)
    register_payslips(app, container)
    register_advances(app, container)
    register_notifications(app, container)

    return app
