from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ADMIN_VIEWS, ViewState
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import SessionUser


@dataclass
class AppSession:
    """Per-client navigation context: who is logged in and what they look at."""

    user: Optional[SessionUser] = None
    view: ViewState = ViewState.LOGIN
    selected_worker_id: Optional[str] = None

    def login(self, user: SessionUser) -> None:
        self.user = user
        self.view = ViewState.DASHBOARD
        self.selected_worker_id = None

    def logout(self) -> None:
        self.user = None
        self.view = ViewState.LOGIN
        self.selected_worker_id = None

    def navigate(self, view: ViewState, *, worker_id: Optional[str] = None) -> ViewState:
        view = ViewState(view)
        if view == ViewState.LOGIN:
            self.logout()
            return self.view
        if self.user is None:
            raise AuthenticationError("Najprv sa prihláste")
        if view in ADMIN_VIEWS and not self.user.is_admin:
            raise AuthorizationError("Prístup len pre administrátora")
        if view == ViewState.WORKER_PROFILE:
            if not worker_id:
                raise ValidationError("Nie je vybraný pracovník")
            self.selected_worker_id = worker_id
        self.view = view
        return self.view
