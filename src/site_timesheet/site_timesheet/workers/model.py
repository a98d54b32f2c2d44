from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Worker:
    """Domain entity: worker whose shifts are logged.

    `role` is a free-text job label (Murár, Zvárač, ...), not an access role.
    """

    worker_id: str
    name: str
    role: str
