from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Site
from .repository import SiteRepository

logger = logging.getLogger(__name__)


class SiteService:
    """Use case: manage construction sites (admin)."""

    def __init__(self, sites: SiteRepository):
        self._sites = sites

    def list_all(self) -> Sequence[Site]:
        return self._sites.list_all()

    def search(self, query: str = "") -> list[Site]:
        q = (query or "").strip().lower()
        return [s for s in self._sites.list_all() if q in s.name.lower() or q in s.address.lower()]

    def get(self, site_id: str) -> Site:
        site = self._sites.get_by_id(site_id)
        if not site:
            raise NotFoundError("Stavba neexistuje")
        return site

    def add(self, *, name: str, address: str = "") -> str:
        name = require_non_empty(name, "Názov stavby")
        site_id = self._sites.add(name=name, address=(address or "").strip())
        logger.info("Site %s added (%s)", site_id, name)
        return site_id

    def edit(self, site_id: str, *, name: str, address: str = "") -> None:
        name = require_non_empty(name, "Názov stavby")
        if not self._sites.update(site_id, name=name, address=(address or "").strip()):
            raise NotFoundError("Stavba neexistuje")

    def remove(self, site_id: str) -> None:
        # Records referencing the site stay; views fall back to a placeholder name.
        if not self._sites.remove(site_id):
            raise NotFoundError("Stavba neexistuje")
        logger.info("Site %s removed", site_id)
