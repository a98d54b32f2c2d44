from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.decorators import admin_required, json_body, json_errors, login_required
from ..container import Container
from .model import Worker


def _worker_json(w: Worker) -> dict:
    return {"worker_id": w.worker_id, "name": w.name, "role": w.role}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/workers", methods=["GET"], endpoint="list_workers")
    @login_required
    @json_errors
    def list_workers():
        q = request.args.get("q", "")
        workers = container.worker_service.search(q) if q else container.worker_service.list_all()
        return jsonify({"items": [_worker_json(w) for w in workers]})

    @app.route("/api/workers", methods=["POST"], endpoint="add_worker")
    @admin_required
    @json_errors
    def add_worker():
        data = json_body()
        worker_id = container.worker_service.add(name=data.get("name", ""), role=data.get("role", ""))
        return jsonify({"success": True, "worker_id": worker_id}), 201

    @app.route("/api/workers/<worker_id>", methods=["PATCH"], endpoint="edit_worker")
    @admin_required
    @json_errors
    def edit_worker(worker_id: str):
        data = json_body()
        container.worker_service.edit(worker_id, name=data.get("name", ""), role=data.get("role", ""))
        return jsonify({"success": True})

    @app.route("/api/workers/<worker_id>", methods=["DELETE"], endpoint="remove_worker")
    @admin_required
    @json_errors
    def remove_worker(worker_id: str):
        container.worker_service.remove(worker_id)
        return jsonify({"success": True})
