from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.qr import decode_qr_image, render_qr_png
from ..common.web import json_error
from ..core.exceptions import MalformedReceiptError
from ..container import Container
from .formatting import clean_hash, is_valid_hash_format


def register(app: Flask, container: Container) -> None:
    receipts = container.receipt_service

    def _verify(raw):
        try:
            result = receipts.verify_receipt(raw)
        except MalformedReceiptError:
            return json_error("Invalid receipt format", 400)
        except Exception:
            app.logger.exception("receipt verification failed")
            return json_error("System error while verifying the receipt", 500)
        return jsonify({"success": True, **result.to_dict()})

    @app.route("/api/receipts/verify", methods=["POST"], endpoint="api_verify_receipt")
    def api_verify_receipt():
        data = request.get_json(silent=True) or {}
        raw = data.get("receipt")
        if raw is None:
            raw = request.form.get("receipt", "")
        return _verify(raw)

    @app.route("/api/receipts/verify/image", methods=["POST"], endpoint="api_verify_receipt_image")
    def api_verify_receipt_image():
        upload = request.files.get("image")
        if upload is None:
            return json_error("No image uploaded", 400)
        try:
            raw = decode_qr_image(upload.stream)
        except Exception:
            app.logger.warning("uploaded receipt image could not be read", exc_info=True)
            return json_error("Could not read the uploaded image", 400)
        if not raw:
            return json_error("No QR code found in the image", 400)
        return _verify(raw)

    @app.route("/api/receipts/<receipt>/qr", methods=["GET"], endpoint="api_receipt_qr")
    def api_receipt_qr(receipt: str):
        if not is_valid_hash_format(receipt):
            return json_error("Invalid receipt format", 400)
        png = render_qr_png(clean_hash(receipt))
        return send_file(io.BytesIO(png), mimetype="image/png")
