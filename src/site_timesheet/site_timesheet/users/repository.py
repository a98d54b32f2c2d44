from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Protocol

from ..core.enums import Role
from .model import Account

logger = logging.getLogger(__name__)


class AccountRepository(Protocol):
    def get_by_username(self, username: str) -> Optional[Account]:
        raise NotImplementedError


class ConfigAccountRepository(AccountRepository):
    """Accounts declared in settings (ACCOUNTS); lookups ignore case."""

    def __init__(self, accounts: Iterable[Mapping]):
        self._accounts: dict[str, Account] = {}
        for item in accounts:
            try:
                account = Account(
                    username=str(item["username"]).strip(),
                    display_name=str(item.get("display_name") or item["username"]).strip(),
                    password_hash=str(item["password_hash"]),
                    role=Role(item.get("role", Role.USER.value)),
                )
            except (KeyError, ValueError):
                logger.warning("Ignoring invalid account entry for %r", item.get("username"))
                continue
            self._accounts[account.username.lower()] = account

    def get_by_username(self, username: str) -> Optional[Account]:
        return self._accounts.get((username or "").strip().lower())
