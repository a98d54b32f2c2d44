from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.decorators import admin_required, json_body, json_errors, login_required
from ..container import Container
from ..records.model import record_as_dict
from .service import HistoryItem


def _item_json(item: HistoryItem) -> dict:
    out = record_as_dict(item.record)
    out.update(site_name=item.site_name, worker_name=item.worker_name, hours=round(item.hours, 2))
    return out


def register(app: Flask, container: Container) -> None:
    @app.route("/api/history", methods=["GET"], endpoint="history")
    @login_required
    @json_errors
    def history():
        items = container.history_service.list_history(
            date_from=request.args.get("from") or None,
            date_to=request.args.get("to") or None,
        )
        return jsonify({"items": [_item_json(i) for i in items]})

    @app.route("/api/records/<record_id>", methods=["PATCH"], endpoint="edit_record")
    @admin_required
    @json_errors
    def edit_record(record_id: str):
        changes = json_body()
        record = container.history_service.edit_record(record_id, changes)
        return jsonify({"success": True, "record": record_as_dict(record)})

    @app.route("/api/records/<record_id>", methods=["DELETE"], endpoint="delete_record")
    @login_required
    @json_errors
    def delete_record(record_id: str):
        container.history_service.delete_record(record_id)
        return jsonify({"success": True})

    @app.route("/api/workers/<worker_id>/profile", methods=["GET"], endpoint="worker_profile")
    @admin_required
    @json_errors
    def worker_profile(worker_id: str):
        month = request.args.get("month") or now_local().strftime("%Y-%m")
        profile = container.history_service.worker_profile(worker_id, month)
        return jsonify(
            {
                "worker": {"worker_id": profile.worker.worker_id, "name": profile.worker.name, "role": profile.worker.role},
                "month": profile.month,
                "items": [_item_json(i) for i in profile.items],
                "total_hours": round(profile.total_hours, 2),
                "completed_shifts": profile.completed_shifts,
                "average_hours": round(profile.average_hours, 2),
            }
        )
