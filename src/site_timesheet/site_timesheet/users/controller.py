from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.decorators import json_body, json_errors, login_required
from ..container import Container
from ..core.enums import Role, ViewState
from .model import SessionUser
from .session import AppSession

logger = logging.getLogger(__name__)


def _app_session() -> AppSession:
    user = None
    if "user_name" in session:
        user = SessionUser(display_name=session["user_name"], role=Role(session["role"]))
    return AppSession(
        user=user,
        view=ViewState(session.get("view", ViewState.LOGIN.value)),
        selected_worker_id=session.get("selected_worker_id"),
    )


def _store(app_session: AppSession) -> None:
    session["view"] = app_session.view.value
    session["selected_worker_id"] = app_session.selected_worker_id


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        data = json_body() or request.form
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session["user_name"] = s_user.display_name
        session["role"] = s_user.role.value
        app_session = _app_session()
        app_session.login(s_user)
        _store(app_session)

        logger.info("User %s logged in (%s)", s_user.display_name, s_user.role.value)
        return jsonify(
            {
                "success": True,
                "user": {"display_name": s_user.display_name, "role": s_user.role.value},
                "view": app_session.view.value,
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "view": ViewState.LOGIN.value})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        app_session = _app_session()
        return jsonify(
            {
                "display_name": session["user_name"],
                "role": session["role"],
                "view": app_session.view.value,
                "selected_worker_id": app_session.selected_worker_id,
            }
        )

    @app.route("/api/navigate", methods=["POST"], endpoint="navigate")
    @login_required
    @json_errors
    def navigate():
        data = json_body()
        app_session = _app_session()
        try:
            target = ViewState(data.get("view", ""))
        except ValueError:
            return jsonify({"success": False, "message": "Neznáme zobrazenie"}), 400
        view = app_session.navigate(target, worker_id=data.get("worker_id"))
        if view == ViewState.LOGIN:
            session.clear()
        else:
            _store(app_session)
        return jsonify({"success": True, "view": view.value, "selected_worker_id": app_session.selected_worker_id})
