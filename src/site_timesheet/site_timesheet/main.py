from __future__ import annotations

import importlib
import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.logging_setup import setup_logging
from .database.bootstrap import apply_schema, list_tables, seed_defaults, upgrade_legacy_records
from .database.connection import DBConfig, DatabaseConnection

from .container import BACKEND_MYSQL, build_container
from .history.controller import register as register_history
from .reports.controller import register as register_reports
from .shifts.controller import register as register_shifts
from .sites.controller import register as register_sites
from .users.controller import register as register_users
from .workers.controller import register as register_workers

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _load_settings(settings_module: Optional[str], overrides: dict) -> SimpleNamespace:
    module = importlib.import_module(settings_module or get_settings_module())
    values = {k: getattr(module, k) for k in dir(module) if k.isupper()}
    values.update(overrides)
    return SimpleNamespace(**values)


def create_app(settings_module: Optional[str] = None, **overrides) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_module, overrides)

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = settings.SECRET_KEY
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = getattr(settings, "STORAGE_BACKEND", "json")
    db_config = getattr(settings, "DB_CONFIG", {})
    seed = bool(getattr(settings, "SEED_DEFAULTS", True))

    if backend == BACKEND_MYSQL and bool(getattr(settings, "AUTO_INIT_DB", False)):
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        apply_schema(conn, schema_path=SCHEMA_PATH)
        upgrade_legacy_records(conn)
        if seed:
            seed_defaults(conn)
        logger.info("MySQL schema ready (tables=%s)", len(list_tables(conn)))

    container = build_container(
        backend=backend,
        data_dir=getattr(settings, "DATA_DIR", "data"),
        seed_defaults=seed,
        db_config=db_config,
        accounts=tuple(getattr(settings, "ACCOUNTS", ())),
    )
    app.extensions["site_timesheet"] = container

    register_users(app, container)
    register_shifts(app, container)
    register_history(app, container)
    register_reports(app, container)
    register_sites(app, container)
    register_workers(app, container)

    logger.info("Site timesheet app created (backend=%s, debug=%s)", backend, app.config["DEBUG"])
    return app
