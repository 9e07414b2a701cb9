from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.qr import render_qr_png
from ..common.web import creator_required, current_creator_id, domain_error_response, json_error
from ..core.exceptions import DomainError
from ..container import Container
from .templates import FIELD_OPTIONS, PRESET_TEMPLATES


def register(app: Flask, container: Container) -> None:
    sheets = container.sheet_service
    results = container.results_service

    @app.route("/api/templates", methods=["GET"], endpoint="api_templates")
    def api_templates():
        return jsonify(
            {
                "success": True,
                "templates": [t.to_dict() for t in PRESET_TEMPLATES],
                "fields": [
                    {"id": f.field_id, "label": f.label, "required": f.required} for f in FIELD_OPTIONS
                ],
            }
        )

    @app.route("/api/sheets", methods=["POST"], endpoint="api_create_sheet")
    @creator_required
    def api_create_sheet():
        data = request.get_json(silent=True) or {}
        try:
            sheet = sheets.create_sheet(
                creator_id=current_creator_id(),
                title=data.get("title", ""),
                description=data.get("description"),
                required_fields=data.get("requiredFields"),
                time_format=data.get("timeFormat"),
                expires_at=data.get("expiresAt"),
                template_id=data.get("templateId"),
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            app.logger.exception("creating muster sheet failed")
            return json_error("System error while creating the sheet", 500)

        app.logger.info("muster sheet %s created", sheet.sheet_id)
        return (
            jsonify({"success": True, "sheet": sheet.to_dict(), "shareUrl": sheets.share_url(sheet.sheet_id)}),
            201,
        )

    @app.route("/api/sheets", methods=["GET"], endpoint="api_list_sheets")
    @creator_required
    def api_list_sheets():
        creator_id = current_creator_id()
        items = sheets.list_for_creator(creator_id)
        return jsonify(
            {
                "success": True,
                "sheets": [
                    {**s.to_dict(), "accepting": sheets.is_accepting(s), "shareUrl": sheets.share_url(s.sheet_id)}
                    for s in items
                ],
                "stats": sheets.stats_for_creator(creator_id).to_dict(),
            }
        )

    @app.route("/api/sheets/<sheet_id>", methods=["GET"], endpoint="api_get_sheet")
    def api_get_sheet(sheet_id: str):
        try:
            sheet = sheets.get_sheet(sheet_id)
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "sheet": sheet.public_dict(), "accepting": sheets.is_accepting(sheet)})

    @app.route("/api/sheets/<sheet_id>", methods=["PUT"], endpoint="api_update_sheet")
    @creator_required
    def api_update_sheet(sheet_id: str):
        data = request.get_json(silent=True) or {}
        try:
            sheet = sheets.update_sheet(
                sheet_id=sheet_id,
                requester_id=current_creator_id(),
                title=data.get("title"),
                description=data.get("description"),
                required_fields=data.get("requiredFields"),
                time_format=data.get("timeFormat"),
                expires_at=data.get("expiresAt"),
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            app.logger.exception("updating muster sheet %s failed", sheet_id)
            return json_error("System error while updating the sheet", 500)
        return jsonify({"success": True, "sheet": sheet.to_dict()})

    @app.route("/api/sheets/<sheet_id>/active", methods=["POST"], endpoint="api_set_sheet_active")
    @creator_required
    def api_set_sheet_active(sheet_id: str):
        data = request.get_json(silent=True) or {}
        if not isinstance(data.get("isActive"), bool):
            return json_error("isActive must be true or false", 400)
        try:
            sheet = sheets.set_active(
                sheet_id=sheet_id,
                requester_id=current_creator_id(),
                is_active=data["isActive"],
            )
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "sheet": sheet.to_dict()})

    @app.route("/api/sheets/<sheet_id>/clone", methods=["POST"], endpoint="api_clone_sheet")
    @creator_required
    def api_clone_sheet(sheet_id: str):
        try:
            sheet = sheets.clone_sheet(sheet_id=sheet_id, requester_id=current_creator_id())
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            app.logger.exception("cloning muster sheet %s failed", sheet_id)
            return json_error("System error while cloning the sheet", 500)

        app.logger.info("muster sheet %s cloned into %s", sheet_id, sheet.sheet_id)
        return (
            jsonify({"success": True, "sheet": sheet.to_dict(), "shareUrl": sheets.share_url(sheet.sheet_id)}),
            201,
        )

    @app.route("/api/sheets/<sheet_id>/qr", methods=["GET"], endpoint="api_sheet_qr")
    def api_sheet_qr(sheet_id: str):
        try:
            sheet = sheets.get_sheet(sheet_id)
        except DomainError as e:
            return domain_error_response(e)
        png = render_qr_png(sheets.share_url(sheet.sheet_id))
        return send_file(io.BytesIO(png), mimetype="image/png")

    @app.route("/api/sheets/<sheet_id>/results", methods=["GET"], endpoint="api_sheet_results")
    @creator_required
    def api_sheet_results(sheet_id: str):
        try:
            data = results.build_results(sheet_id, current_creator_id())
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, **data.to_dict()})

    @app.route("/api/sheets/<sheet_id>/results.csv", methods=["GET"], endpoint="api_sheet_results_csv")
    @creator_required
    def api_sheet_results_csv(sheet_id: str):
        try:
            filename, csv_bytes = results.export_csv(sheet_id, current_creator_id())
        except DomainError as e:
            return domain_error_response(e)
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
