from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import domain_error_response, json_error
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sheets/<sheet_id>/entries", methods=["POST"], endpoint="api_submit_entry")
    def api_submit_entry(sheet_id: str):
        """Anonymous sign-in; the body is keyed by field id (first_name, last_name, ...)."""
        form = request.get_json(silent=True)
        if form is None:
            form = request.form.to_dict()
        try:
            result = container.attendance_service.submit(sheet_id, form)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            app.logger.exception("attendance submission on sheet %s failed", sheet_id)
            return json_error("System error while recording attendance", 500)

        message = "Attendance recorded"
        if result.receipt is None:
            message = "Attendance recorded, but a receipt could not be issued"
        return jsonify({"success": True, "message": message, **result.to_dict()}), 201
