from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError
from .model import SessionUser
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate a foreman or admin (login)."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def authenticate(self, username: str, password: str) -> SessionUser:
        if not (username or "").strip() or not (password or "").strip():
            raise AuthenticationError("Zadajte meno aj heslo")

        account = self._accounts.get_by_username(username)
        if not account:
            logger.info("Login failed for unknown user %r", username)
            raise AuthenticationError("Nesprávne meno alebo heslo")

        try:
            ok = check_password_hash(account.password_hash, password.strip())
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            logger.info("Login failed for %r", account.username)
            raise AuthenticationError("Nesprávne meno alebo heslo")

        return SessionUser(display_name=account.display_name, role=account.role)
