from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Site


class SiteRepository(Protocol):
    def list_all(self) -> Sequence[Site]:
        raise NotImplementedError

    def get_by_id(self, site_id: str) -> Optional[Site]:
        raise NotImplementedError

    def add(self, *, name: str, address: str) -> str:
        raise NotImplementedError

    def update(self, site_id: str, *, name: str, address: str) -> bool:
        raise NotImplementedError

    def remove(self, site_id: str) -> bool:
        """Delete the site only; records that reference it are left alone."""

        raise NotImplementedError
