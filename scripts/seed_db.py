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
from src.site_timesheet.site_timesheet.database.bootstrap import seed_defaults
from src.site_timesheet.site_timesheet.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("seed_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    seed_defaults(conn)
    cfg = conn.config
    logger.info("Seeded demo sites/workers -> %s@%s:%s/%s", cfg.user, cfg.host, cfg.port, cfg.database)


if __name__ == "__main__":
    main()
