from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_WORKER_ROLE
from ..core.exceptions import NotFoundError
from .model import Worker
from .repository import WorkerRepository

logger = logging.getLogger(__name__)


class WorkerService:
    """Use case: manage workers (admin)."""

    def __init__(self, workers: WorkerRepository):
        self._workers = workers

    def list_all(self) -> Sequence[Worker]:
        return self._workers.list_all()

    def search(self, query: str = "") -> list[Worker]:
        q = (query or "").strip().lower()
        return [w for w in self._workers.list_all() if q in w.name.lower() or q in w.role.lower()]

    def get(self, worker_id: str) -> Worker:
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise NotFoundError("Pracovník neexistuje")
        return worker

    def add(self, *, name: str, role: str = "") -> str:
        name = require_non_empty(name, "Meno pracovníka")
        worker_id = self._workers.add(name=name, role=(role or "").strip() or DEFAULT_WORKER_ROLE)
        logger.info("Worker %s added (%s)", worker_id, name)
        return worker_id

    def edit(self, worker_id: str, *, name: str, role: str = "") -> None:
        name = require_non_empty(name, "Meno pracovníka")
        if not self._workers.update(worker_id, name=name, role=(role or "").strip() or DEFAULT_WORKER_ROLE):
            raise NotFoundError("Pracovník neexistuje")

    def remove(self, worker_id: str) -> None:
        if not self._workers.remove(worker_id):
            raise NotFoundError("Pracovník neexistuje")
        logger.info("Worker %s removed", worker_id)
