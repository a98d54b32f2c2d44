from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import today_iso
from ..common.decorators import json_body, json_errors, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from ..records.model import record_as_dict
from .form import ShiftEntryForm

QUEUE_KINDS = ("live", "manual")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    @json_errors
    def dashboard():
        work_date = request.args.get("date") or today_iso()
        workers = container.worker_service.list_all()
        return jsonify(
            {
                "date": work_date,
                "foreman_name": session["user_name"],
                "sites": [{"site_id": s.site_id, "name": s.name, "address": s.address} for s in container.site_service.list_all()],
                "workers": container.shift_board.snapshot(work_date, workers),
                "active": [record_as_dict(r) for r in container.shift_board.active_records(work_date)],
            }
        )

    @app.route("/api/shifts/state", methods=["GET"], endpoint="shift_state")
    @login_required
    @json_errors
    def shift_state():
        worker_id = request.args.get("worker_id", "")
        work_date = request.args.get("date") or today_iso()
        state = container.shift_service.current_state(worker_id, work_date)
        return jsonify(
            {
                "worker_id": state.worker_id,
                "date": state.work_date,
                "phase": state.phase.value,
                "mode": state.mode.value,
                "active": record_as_dict(state.active) if state.active else None,
                "last_completed": record_as_dict(state.last_completed) if state.last_completed else None,
            }
        )

    @app.route("/api/shifts/submit", methods=["POST"], endpoint="shift_submit")
    @login_required
    @json_errors
    def shift_submit():
        data = json_body()
        outcome = container.shift_service.submit(
            foreman_name=session["user_name"],
            worker_id=data.get("worker_id", ""),
            site_id=data.get("site_id", ""),
            work_date=data.get("date") or today_iso(),
            lunch_duration=data.get("lunch_duration", ""),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
        )
        return jsonify({"success": True, "mode": outcome.mode.value, "record_id": outcome.record_id})

    @app.route("/api/records/manual", methods=["POST"], endpoint="record_manual")
    @login_required
    @json_errors
    def record_manual():
        data = json_body()
        record_id = container.shift_service.record_manual(
            foreman_name=session["user_name"],
            worker_id=data.get("worker_id", ""),
            site_id=data.get("site_id", ""),
            work_date=data.get("date") or today_iso(),
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
            lunch_duration=data.get("lunch_duration", ""),
        )
        return jsonify({"success": True, "record_id": record_id}), 201

    @app.route("/api/shifts/queue", methods=["POST"], endpoint="shift_queue")
    @login_required
    @json_errors
    def shift_queue():
        data = json_body()
        kind = data.get("kind", "live")
        if kind not in QUEUE_KINDS:
            raise ValidationError(f"Neznámy typ zápisu: {kind}")
        user = session["user_name"]
        form = ShiftEntryForm(
            service=container.shift_service,
            dispatcher=container.dispatcher,
            foreman_name=user,
            on_error=container.write_failures.reporter(user),
            site_id=str(data.get("site_id") or ""),
            worker_id=str(data.get("worker_id") or ""),
        )
        if data.get("date"):
            form.work_date = data["date"]
        for name in ("start_time", "lunch_duration", "end_time"):
            if data.get(name):
                setattr(form, name, data[name])

        if kind == "manual":
            form.submit_manual()
        else:
            form.submit_live()
        return jsonify({"success": True, "queued": True}), 202

    @app.route("/api/shifts/failures", methods=["GET"], endpoint="shift_failures")
    @login_required
    @json_errors
    def shift_failures():
        return jsonify({"messages": container.write_failures.drain(session["user_name"])})
