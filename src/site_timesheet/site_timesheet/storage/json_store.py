from __future__ import annotations

import copy
import json
import logging
import os
import threading
from pathlib import Path
from typing import Optional

from ..core.exceptions import StorageError
from . import schema

logger = logging.getLogger(__name__)

COLLECTIONS = ("sites", "workers", "records")
META_FILE = "_meta.json"


class JsonCollectionStore:
    """Local persistence: one JSON array file per named collection.

    Collections are persisted independently (sites.json, workers.json,
    records.json). A missing or corrupt file is treated as absent data and
    loads as the collection's default instead of raising. The schema version
    lives in _meta.json and is upgraded once in open().
    """

    def __init__(self, data_dir: str | Path, *, defaults: Optional[dict[str, list[dict]]] = None):
        self._dir = Path(data_dir)
        self._defaults = defaults or {}
        self._cache: dict[str, list[dict]] = {}
        self._opened = False
        # Re-entrant so repositories can hold it across load + save.
        self.lock = threading.RLock()

    @property
    def data_dir(self) -> Path:
        return self._dir

    def _path(self, name: str) -> Path:
        return self._dir / f"{name}.json"

    def open(self) -> "JsonCollectionStore":
        with self.lock:
            if self._opened:
                return self
            try:
                self._dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StorageError(f"Nepodarilo sa vytvoriť dátový priečinok {self._dir}") from exc

            version = self._read_version()
            if version < schema.CURRENT_SCHEMA_VERSION:
                collections = {name: self._read(name) for name in COLLECTIONS}
                new_version = schema.upgrade(collections, version)
                for name in COLLECTIONS:
                    if self._path(name).exists():
                        self._write(name, collections[name])
                    else:
                        self._cache[name] = collections[name]
                self._write_version(new_version)
                logger.info("Data store %s upgraded to schema v%s", self._dir, new_version)
            self._opened = True
            return self

    def _read_version(self) -> int:
        meta_path = self._dir / META_FILE
        if not meta_path.exists():
            # Data written before versioning started counts as v1.
            return 1 if self._path("records").exists() else 0
        try:
            meta = json.loads(meta_path.read_text(encoding="utf-8"))
            return int(meta.get("schema_version", 1))
        except (OSError, ValueError, AttributeError):
            logger.warning("Unreadable %s, assuming schema v1", meta_path)
            return 1

    def _write_version(self, version: int) -> None:
        self._atomic_write(self._dir / META_FILE, {"schema_version": int(version)})

    def _default(self, name: str) -> list[dict]:
        return copy.deepcopy(self._defaults.get(name, []))

    def _read(self, name: str) -> list[dict]:
        path = self._path(name)
        if not path.exists():
            return self._default(name)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Corrupt collection file %s, falling back to defaults", path)
            return self._default(name)
        if not isinstance(data, list):
            logger.warning("Collection file %s is not a JSON array, falling back to defaults", path)
            return self._default(name)
        return data

    def load(self, name: str) -> list[dict]:
        with self.lock:
            if name not in self._cache:
                self._cache[name] = self._read(name)
            return copy.deepcopy(self._cache[name])

    def save(self, name: str, items: list[dict]) -> None:
        with self.lock:
            self._write(name, items)

    def _write(self, name: str, items: list[dict]) -> None:
        self._atomic_write(self._path(name), items)
        self._cache[name] = copy.deepcopy(items)

    def _atomic_write(self, path: Path, payload) -> None:
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp, path)
        except OSError as exc:
            logger.error("Failed to write %s: %s", path, exc)
            raise StorageError("Zápis sa nepodaril, skúste to znova.") from exc
