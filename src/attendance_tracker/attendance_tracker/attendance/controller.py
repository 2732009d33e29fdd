from __future__ import annotations

import logging
from typing import Callable

from flask import Flask, jsonify, session

from ..container import Container
from ..core.exceptions import StoreUnavailable
from .model import OperationResult

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def current_user_id() -> str:
        # Auth lives outside this app; single-user deployments fall back to the configured id.
        return str(session.get("user_id") or app.config["DEFAULT_USER_ID"])

    def _to_response(result: OperationResult):
        body = {
            "success": result.applied,
            "phase": result.phase.value,
            "record": result.record.to_document() if result.record else None,
        }
        if result.applied:
            return jsonify(body), 200
        body["reason"] = result.reason.value if result.reason else None
        return jsonify(body), 409

    def _run(operation: str, action: Callable[[str], OperationResult]):
        try:
            return _to_response(action(current_user_id()))
        except StoreUnavailable as e:
            logger.warning("%s failed, store unavailable: %s", operation, e)
            return jsonify({"success": False, "message": "Attendance store unavailable"}), 503
        except Exception:
            logger.exception("%s failed", operation)
            return jsonify({"success": False, "message": "Internal error"}), 500

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        try:
            return jsonify(service.dashboard(current_user_id())), 200
        except StoreUnavailable as e:
            logger.warning("dashboard failed, store unavailable: %s", e)
            return jsonify({"success": False, "message": "Attendance store unavailable"}), 503

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    def clock_in():
        return _run("clock_in", service.clock_in)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    def clock_out():
        return _run("clock_out", service.clock_out)

    @app.route("/api/attendance/breaks/start", methods=["POST"], endpoint="attendance_break_start")
    def start_break():
        return _run("start_break", service.start_break)

    @app.route("/api/attendance/breaks/end", methods=["POST"], endpoint="attendance_break_end")
    def end_break():
        return _run("end_break", service.end_break)

    @app.route("/api/attendance/auto-close", methods=["POST"], endpoint="attendance_auto_close")
    def auto_close():
        """Sweep trigger for deployments driven by an external cron instead of the in-process scheduler."""
        try:
            closed = service.auto_close_open_sessions()
        except StoreUnavailable as e:
            logger.warning("auto-close failed, store unavailable: %s", e)
            return jsonify({"success": False, "message": "Attendance store unavailable"}), 503
        return jsonify(
            {
                "success": True,
                "message": f"Auto clock-out completed. {len(closed)} records updated.",
                "count": len(closed),
            }
        ), 200
