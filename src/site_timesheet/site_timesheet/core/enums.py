from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used as a capability gate."""

    ADMIN = "admin"
    USER = "user"


class RecordStatus(str, Enum):
    """Lifecycle status of a work record."""

    ACTIVE = "active"
    COMPLETED = "completed"


class ShiftMode(str, Enum):
    """What the next dashboard action for a worker/date will do."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class ViewState(str, Enum):
    LOGIN = "login"
    DASHBOARD = "dashboard"
    MANAGE = "manage"
    HISTORY = "history"
    REPORTS = "reports"
    WORKER_PROFILE = "worker_profile"


ADMIN_VIEWS = frozenset({ViewState.MANAGE, ViewState.REPORTS, ViewState.WORKER_PROFILE})


class ShiftPhase(str, Enum):
    """State of the per-(worker, date) shift state machine."""

    NO_SHIFT = "no_shift"
    ACTIVE = "active"
    COMPLETED = "completed"
