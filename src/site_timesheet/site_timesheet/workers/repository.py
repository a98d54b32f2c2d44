from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Worker


class WorkerRepository(Protocol):
    def list_all(self) -> Sequence[Worker]:
        raise NotImplementedError

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def add(self, *, name: str, role: str) -> str:
        raise NotImplementedError

    def update(self, worker_id: str, *, name: str, role: str) -> bool:
        raise NotImplementedError

    def remove(self, worker_id: str) -> bool:
        raise NotImplementedError
