from __future__ import annotations

import logging
import uuid
from dataclasses import fields
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import epoch_millis
from ..common.events import ChangeFeed, Subscription
from ..core.enums import RecordStatus
from ..core.exceptions import ActiveShiftConflictError, ValidationError
from ..records.model import UPDATABLE_FIELDS, WorkRecord, WorkRecordDraft
from ..records.repository import RecordRepository, RecordsCallback
from ..sites.model import Site
from ..sites.repository import SiteRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .json_store import JsonCollectionStore

logger = logging.getLogger(__name__)

# Field name <-> JSON key. The JSON keys are the historical on-disk names.
_RECORD_KEYS = {
    "record_id": "id",
    "foreman_name": "foremanName",
    "site_id": "siteId",
    "worker_id": "workerId",
    "work_date": "date",
    "start_time": "startTime",
    "lunch_duration": "lunchDuration",
    "end_time": "endTime",
    "created_at": "createdAt",
    "status": "status",
}
_RECORD_FIELDS = frozenset(f.name for f in fields(WorkRecord))


def _new_id() -> str:
    return str(uuid.uuid4())


def record_to_json(record: WorkRecord) -> dict[str, Any]:
    out = {key: getattr(record, attr) for attr, key in _RECORD_KEYS.items()}
    out["status"] = record.status.value
    return out


def record_from_json(item: dict[str, Any]) -> WorkRecord:
    return WorkRecord(
        record_id=str(item["id"]),
        foreman_name=str(item.get("foremanName") or ""),
        site_id=str(item["siteId"]),
        worker_id=str(item["workerId"]),
        work_date=str(item["date"]),
        start_time=str(item.get("startTime") or ""),
        lunch_duration=str(item.get("lunchDuration") or ""),
        end_time=str(item.get("endTime") or ""),
        created_at=int(item.get("createdAt") or 0),
        status=RecordStatus(item.get("status") or RecordStatus.COMPLETED.value),
    )


class JsonRecordRepository(RecordRepository):
    COLLECTION = "records"

    def __init__(
        self,
        store: JsonCollectionStore,
        *,
        clock: Callable[[], int] = epoch_millis,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._feed: ChangeFeed[Sequence[WorkRecord]] = ChangeFeed()

    def _load(self) -> tuple[list[WorkRecord], list[Any]]:
        """Parse the collection. Entries that do not parse are returned raw so writes keep them."""
        records: list[WorkRecord] = []
        unparsed: list[Any] = []
        for item in self._store.load(self.COLLECTION):
            try:
                records.append(record_from_json(item))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed record entry: %r", item)
                unparsed.append(item)
        return records, unparsed

    def _records(self) -> list[WorkRecord]:
        return self._load()[0]

    def _save(self, records: list[WorkRecord], unparsed: list[Any]) -> None:
        self._store.save(self.COLLECTION, [record_to_json(r) for r in records] + unparsed)

    @staticmethod
    def _check_single_active(records: Sequence[WorkRecord], candidate: WorkRecord) -> None:
        if not candidate.is_active:
            return
        for r in records:
            if (
                r.record_id != candidate.record_id
                and r.is_active
                and r.worker_id == candidate.worker_id
                and r.work_date == candidate.work_date
            ):
                raise ActiveShiftConflictError("Pracovník už má v tento deň otvorenú smenu")

    def append(self, draft: WorkRecordDraft) -> str:
        with self._store.lock:
            records, unparsed = self._load()
            last_created = max((r.created_at for r in records), default=0)
            record = WorkRecord.from_draft(
                draft,
                record_id=self._id_factory(),
                created_at=max(int(self._clock()), last_created + 1),
            )
            self._check_single_active(records, record)
            records.insert(0, record)
            self._save(records, unparsed)
            logger.info(
                "Record %s appended (worker=%s date=%s status=%s)",
                record.record_id,
                record.worker_id,
                record.work_date,
                record.status.value,
            )
            self._notify(records)
        return record.record_id

    def update(self, record_id: str, changes: dict[str, Any]) -> bool:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Nepodporované polia: {', '.join(sorted(unknown))}")

        with self._store.lock:
            records, unparsed = self._load()
            for i, r in enumerate(records):
                if r.record_id == record_id:
                    updated = r.with_changes(changes)
                    self._check_single_active(records, updated)
                    records[i] = updated
                    break
            else:
                return False
            self._save(records, unparsed)
            logger.info("Record %s updated: %s", record_id, sorted(changes))
            self._notify(records)
        return True

    def remove(self, record_id: str) -> bool:
        with self._store.lock:
            records, unparsed = self._load()
            kept = [r for r in records if r.record_id != record_id]
            if len(kept) == len(records):
                return False
            self._save(kept, unparsed)
            logger.info("Record %s removed", record_id)
            self._notify(kept)
        return True

    def get_by_id(self, record_id: str) -> Optional[WorkRecord]:
        return next((r for r in self._records() if r.record_id == record_id), None)

    def find_active(self, worker_id: str, work_date: str) -> Optional[WorkRecord]:
        return next(
            (r for r in self._records() if r.is_active and r.worker_id == worker_id and r.work_date == work_date),
            None,
        )

    def list_all(self, *, order_by: str = "created_at", descending: bool = True) -> Sequence[WorkRecord]:
        if order_by not in _RECORD_FIELDS:
            raise ValueError(f"Unknown order_by field: {order_by}")
        return sorted(self._records(), key=lambda r: getattr(r, order_by), reverse=descending)

    def subscribe(self, callback: RecordsCallback) -> Subscription:
        with self._store.lock:
            subscription = self._feed.subscribe(callback)
            callback(self.list_all())
        return subscription

    def _notify(self, records: list[WorkRecord]) -> None:
        # Called with the store lock held so subscribers see writes in order.
        if len(self._feed):
            self._feed.publish(sorted(records, key=lambda r: r.created_at, reverse=True))


class JsonSiteRepository(SiteRepository):
    COLLECTION = "sites"

    def __init__(self, store: JsonCollectionStore, *, id_factory: Callable[[], str] = _new_id):
        self._store = store
        self._id_factory = id_factory

    def list_all(self) -> Sequence[Site]:
        out: list[Site] = []
        for item in self._store.load(self.COLLECTION):
            try:
                out.append(Site(site_id=str(item["id"]), name=str(item["name"]), address=str(item.get("address") or "")))
            except (KeyError, TypeError):
                logger.warning("Skipping malformed site entry: %r", item)
        return out

    def get_by_id(self, site_id: str) -> Optional[Site]:
        return next((s for s in self.list_all() if s.site_id == site_id), None)

    def add(self, *, name: str, address: str) -> str:
        site_id = self._id_factory()
        with self._store.lock:
            items = self._store.load(self.COLLECTION)
            items.append({"id": site_id, "name": name, "address": address})
            self._store.save(self.COLLECTION, items)
        return site_id

    def update(self, site_id: str, *, name: str, address: str) -> bool:
        with self._store.lock:
            items = self._store.load(self.COLLECTION)
            for item in items:
                if str(item.get("id")) == site_id:
                    item.update(name=name, address=address)
                    self._store.save(self.COLLECTION, items)
                    return True
        return False

    def remove(self, site_id: str) -> bool:
        with self._store.lock:
            items = self._store.load(self.COLLECTION)
            kept = [i for i in items if str(i.get("id")) != site_id]
            if len(kept) == len(items):
                return False
            self._store.save(self.COLLECTION, kept)
        return True


class JsonWorkerRepository(WorkerRepository):
    COLLECTION = "workers"

    def __init__(self, store: JsonCollectionStore, *, id_factory: Callable[[], str] = _new_id):
        self._store = store
        self._id_factory = id_factory

    def list_all(self) -> Sequence[Worker]:
        out: list[Worker] = []
        for item in self._store.load(self.COLLECTION):
            try:
                out.append(Worker(worker_id=str(item["id"]), name=str(item["name"]), role=str(item.get("role") or "")))
            except (KeyError, TypeError):
                logger.warning("Skipping malformed worker entry: %r", item)
        return out

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        return next((w for w in self.list_all() if w.worker_id == worker_id), None)

    def add(self, *, name: str, role: str) -> str:
        worker_id = self._id_factory()
        with self._store.lock:
            items = self._store.load(self.COLLECTION)
            items.append({"id": worker_id, "name": name, "role": role})
            self._store.save(self.COLLECTION, items)
        return worker_id

    def update(self, worker_id: str, *, name: str, role: str) -> bool:
        with self._store.lock:
            items = self._store.load(self.COLLECTION)
            for item in items:
                if str(item.get("id")) == worker_id:
                    item.update(name=name, role=role)
                    self._store.save(self.COLLECTION, items)
                    return True
        return False

    def remove(self, worker_id: str) -> bool:
        with self._store.lock:
            items = self._store.load(self.COLLECTION)
            kept = [i for i in items if str(i.get("id")) != worker_id]
            if len(kept) == len(items):
                return False
            self._store.save(self.COLLECTION, kept)
        return True
