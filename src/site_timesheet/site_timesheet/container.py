from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .common.dispatch import WriteDispatcher, WriteFailureLog
from .database.connection import DBConfig, DatabaseConnection
from .history.service import HistoryService
from .records.mysql_record_repository import MySQLRecordRepository
from .records.repository import RecordRepository
from .reports.service import ReportService
from .shifts.board import ShiftBoard
from .shifts.factory import ShiftActionFactory
from .shifts.service import ShiftService
from .sites.mysql_site_repository import MySQLSiteRepository
from .sites.repository import SiteRepository
from .sites.service import SiteService
from .storage.json_repositories import JsonRecordRepository, JsonSiteRepository, JsonWorkerRepository
from .storage.json_store import JsonCollectionStore
from .storage.seed import DEFAULT_SITES, DEFAULT_WORKERS
from .users.repository import ConfigAccountRepository
from .users.service import AuthService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.service import WorkerService

logger = logging.getLogger(__name__)

BACKEND_JSON = "json"
BACKEND_MYSQL = "mysql"


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    records_repo: RecordRepository
    sites_repo: SiteRepository
    workers_repo: WorkerRepository

    auth_service: AuthService
    site_service: SiteService
    worker_service: WorkerService
    shift_service: ShiftService
    report_service: ReportService
    history_service: HistoryService

    shift_board: ShiftBoard
    dispatcher: WriteDispatcher
    write_failures: WriteFailureLog

    def close(self) -> None:
        self.shift_board.close()
        self.dispatcher.shutdown(wait=True)


def build_container(
    *,
    backend: str = BACKEND_JSON,
    data_dir: str | Path = "data",
    seed_defaults: bool = True,
    db_config: Optional[dict] = None,
    accounts: tuple = (),
) -> Container:
    conn: Optional[DatabaseConnection] = None

    if backend == BACKEND_JSON:
        defaults = {"sites": DEFAULT_SITES, "workers": DEFAULT_WORKERS} if seed_defaults else {}
        store = JsonCollectionStore(data_dir, defaults=defaults).open()
        records_repo: RecordRepository = JsonRecordRepository(store)
        sites_repo: SiteRepository = JsonSiteRepository(store)
        workers_repo: WorkerRepository = JsonWorkerRepository(store)
    elif backend == BACKEND_MYSQL:
        conn = DatabaseConnection(DBConfig.from_dict(db_config or {}))
        records_repo = MySQLRecordRepository(conn)
        sites_repo = MySQLSiteRepository(conn)
        workers_repo = MySQLWorkerRepository(conn)
    else:
        raise ValueError(f"Unknown storage backend: {backend}")

    logger.info("Storage backend: %s", backend)

    auth_service = AuthService(ConfigAccountRepository(accounts))
    site_service = SiteService(sites_repo)
    worker_service = WorkerService(workers_repo)
    shift_service = ShiftService(records_repo, sites_repo, workers_repo, factory=ShiftActionFactory())
    report_service = ReportService(records_repo, sites_repo, workers_repo)
    history_service = HistoryService(records_repo, sites_repo, workers_repo)

    return Container(
        conn=conn,
        records_repo=records_repo,
        sites_repo=sites_repo,
        workers_repo=workers_repo,
        auth_service=auth_service,
        site_service=site_service,
        worker_service=worker_service,
        shift_service=shift_service,
        report_service=report_service,
        history_service=history_service,
        shift_board=ShiftBoard(records_repo),
        dispatcher=WriteDispatcher(),
        write_failures=WriteFailureLog(),
    )
