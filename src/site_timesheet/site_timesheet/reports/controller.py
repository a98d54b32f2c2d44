from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, today_iso
from ..common.decorators import admin_required, json_errors
from ..common.validators import require_iso_date
from ..container import Container
from .export import export_filename, write_csv, write_xlsx
from .model import ReportFilter


def _filter_from_request() -> ReportFilter:
    # Defaults to the current month up to today.
    date_from = request.args.get("from") or now_local().replace(day=1).strftime("%Y-%m-%d")
    date_to = request.args.get("to") or today_iso()
    return ReportFilter(
        date_from=require_iso_date(date_from, "Od"),
        date_to=require_iso_date(date_to, "Do"),
        worker_id=request.args.get("worker_id") or None,
        site_id=request.args.get("site_id") or None,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/report", methods=["GET"], endpoint="admin_report")
    @admin_required
    @json_errors
    def admin_report():
        flt = _filter_from_request()
        data = container.report_service.build_report(flt)
        return jsonify(
            {
                "filter": asdict(flt),
                "rows": [asdict(r) for r in data.rows],
                "total_hours": round(data.total_hours, 2),
                "summary": data.summary,
            }
        )

    @app.route("/api/admin/report.xlsx", methods=["GET"], endpoint="admin_report_xlsx")
    @admin_required
    @json_errors
    def admin_report_xlsx():
        flt = _filter_from_request()
        data = container.report_service.build_report(flt)
        return app.response_class(
            write_xlsx(data.rows),
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f"attachment; filename={export_filename(flt.date_from, flt.date_to, 'xlsx')}"},
        )

    @app.route("/api/admin/report.csv", methods=["GET"], endpoint="admin_report_csv")
    @admin_required
    @json_errors
    def admin_report_csv():
        flt = _filter_from_request()
        data = container.report_service.build_report(flt)
        return app.response_class(
            write_csv(data.rows),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export_filename(flt.date_from, flt.date_to, 'csv')}"},
        )
