from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.site_timesheet.site_timesheet.core.logging_setup import setup_logging
from src.site_timesheet.site_timesheet.database.bootstrap import apply_schema, list_tables, upgrade_legacy_records
from src.site_timesheet.site_timesheet.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("init_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(conn, schema_path=schema_path)
    upgrade_legacy_records(conn)
    tables = list_tables(conn)
    cfg = conn.config
    logger.info("Applied schema.sql -> %s@%s:%s/%s (tables=%s)", cfg.user, cfg.host, cfg.port, cfg.database, len(tables))


if __name__ == "__main__":
    main()
