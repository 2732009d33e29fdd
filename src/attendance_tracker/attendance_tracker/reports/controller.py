from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.validators import require_iso_date, require_year
from ..container import Container
from ..core.exceptions import StoreUnavailable, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def current_user_id() -> str:
        return str(session.get("user_id") or app.config["DEFAULT_USER_ID"])

    @app.errorhandler(ValidationError)
    def _bad_request(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(StoreUnavailable)
    def _store_unavailable(e: StoreUnavailable):
        logger.warning("report failed, store unavailable: %s", e)
        return jsonify({"success": False, "message": "Attendance store unavailable"}), 503

    @app.route("/api/reports/timesheet", methods=["GET"], endpoint="reports_timesheet")
    def timesheet():
        today = container.clock.now().date()
        start_s = request.args.get("start") or today.replace(day=1).isoformat()
        end_s = request.args.get("end") or today.isoformat()

        start = require_iso_date(start_s, "start")
        end = require_iso_date(end_s, "end")
        if end < start:
            raise ValidationError("end must not be before start")

        data = reports.build_timesheet(start=start, end=end, user_id=current_user_id())
        return jsonify({"rows": data.rows, "summary": data.summary}), 200

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="reports_monthly")
    def monthly():
        year = require_year(request.args.get("year") or str(container.clock.now().year), "year")
        return jsonify({"year": year, "months": reports.monthly_hours(year=year, user_id=current_user_id())}), 200
