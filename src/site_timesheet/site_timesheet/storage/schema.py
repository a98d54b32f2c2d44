"""Versioned upgrades of the persisted collections.

Version 1 is the pre-lifecycle layout (records without a `status` field).
Each step takes the loaded collections and upgrades them in place to its
version. Steps run once, when the store is opened.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..core.enums import RecordStatus

logger = logging.getLogger(__name__)

Collections = dict[str, list[dict]]

CURRENT_SCHEMA_VERSION = 2


def _v2_default_record_status(collections: Collections) -> None:
    upgraded = 0
    for item in collections.get("records", []):
        if isinstance(item, dict) and not item.get("status"):
            item["status"] = RecordStatus.COMPLETED.value
            upgraded += 1
    if upgraded:
        logger.info("Schema v2: defaulted status=completed on %s record(s)", upgraded)


UPGRADES: dict[int, Callable[[Collections], None]] = {
    2: _v2_default_record_status,
}


def upgrade(collections: Collections, from_version: int) -> int:
    """Apply every step newer than `from_version`; return the resulting version."""
    version = int(from_version)
    for target in sorted(UPGRADES):
        if target > version:
            UPGRADES[target](collections)
            version = target
    return version
