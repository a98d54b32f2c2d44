from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.decorators import admin_required, json_body, json_errors, login_required
from ..container import Container
from .model import Site


def _site_json(s: Site) -> dict:
    return {"site_id": s.site_id, "name": s.name, "address": s.address}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sites", methods=["GET"], endpoint="list_sites")
    @login_required
    @json_errors
    def list_sites():
        q = request.args.get("q", "")
        sites = container.site_service.search(q) if q else container.site_service.list_all()
        return jsonify({"items": [_site_json(s) for s in sites]})

    @app.route("/api/sites", methods=["POST"], endpoint="add_site")
    @admin_required
    @json_errors
    def add_site():
        data = json_body()
        site_id = container.site_service.add(name=data.get("name", ""), address=data.get("address", ""))
        return jsonify({"success": True, "site_id": site_id}), 201

    @app.route("/api/sites/<site_id>", methods=["PATCH"], endpoint="edit_site")
    @admin_required
    @json_errors
    def edit_site(site_id: str):
        data = json_body()
        container.site_service.edit(site_id, name=data.get("name", ""), address=data.get("address", ""))
        return jsonify({"success": True})

    @app.route("/api/sites/<site_id>", methods=["DELETE"], endpoint="remove_site")
    @admin_required
    @json_errors
    def remove_site(site_id: str):
        container.site_service.remove(site_id)
        return jsonify({"success": True})
