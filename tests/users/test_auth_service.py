import pytest
from werkzeug.security import generate_password_hash

from src.site_timesheet.site_timesheet.core.enums import Role, ViewState
from src.site_timesheet.site_timesheet.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from src.site_timesheet.site_timesheet.users.model import SessionUser
from src.site_timesheet.site_timesheet.users.repository import ConfigAccountRepository
from src.site_timesheet.site_timesheet.users.service import AuthService
from src.site_timesheet.site_timesheet.users.session import AppSession


@pytest.fixture
def auth():
    accounts = ConfigAccountRepository(
        [
            {"username": "Štefan Kukučka", "password_hash": generate_password_hash("190305"), "role": "admin"},
            {"username": "majster", "display_name": "Majster", "password_hash": generate_password_hash("pw"), "role": "user"},
            {"username": "broken", "password_hash": "CHANGE_ME", "role": "user"},
            {"username": "norole", "password_hash": "x", "role": "superuser"},
        ]
    )
    return AuthService(accounts)


def test_login_is_case_insensitive_on_username(auth):
    user = auth.authenticate("  štefan kukučka ", "190305")
    assert user.display_name == "Štefan Kukučka"
    assert user.role == Role.ADMIN


def test_wrong_password_rejected(auth):
    with pytest.raises(AuthenticationError):
        auth.authenticate("majster", "nope")


@pytest.mark.parametrize("username,password", [("", "pw"), ("majster", ""), ("ghost", "pw"), ("broken", "CHANGE_ME"), ("norole", "x")])
def test_other_failures_rejected(auth, username, password):
    with pytest.raises(AuthenticationError):
        auth.authenticate(username, password)


def test_user_role_cannot_open_admin_views():
    session = AppSession()
    session.login(SessionUser(display_name="Majster", role=Role.USER))
    assert session.view == ViewState.DASHBOARD
    assert session.navigate(ViewState.HISTORY) == ViewState.HISTORY
    for view in (ViewState.MANAGE, ViewState.REPORTS, ViewState.WORKER_PROFILE):
        with pytest.raises(AuthorizationError):
            session.navigate(view, worker_id="1")
    assert session.view == ViewState.HISTORY


def test_admin_opens_worker_profile_with_selection():
    session = AppSession()
    with pytest.raises(AuthenticationError):
        session.navigate(ViewState.DASHBOARD)

    session.login(SessionUser(display_name="Admin", role=Role.ADMIN))
    with pytest.raises(ValidationError):
        session.navigate(ViewState.WORKER_PROFILE)
    session.navigate(ViewState.WORKER_PROFILE, worker_id="2")
    assert session.selected_worker_id == "2"

    session.navigate(ViewState.LOGIN)
    assert session.user is None
    assert session.view == ViewState.LOGIN
