from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Site:
    """Domain entity: construction site (stavba)."""

    site_id: str
    name: str
    address: str = ""
