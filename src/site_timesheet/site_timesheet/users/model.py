from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    username: str
    display_name: str
    password_hash: str
    role: Role


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    display_name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
