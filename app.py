from __future__ import annotations

import io
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from flask import Flask, jsonify, request, send_file

from wifi_qr.archive import Download, build_archive, build_single
from wifi_qr.config import Settings, get_settings
from wifi_qr.errors import WifiQrError
from wifi_qr.log import setup_logging
from wifi_qr.notify import LoggingNotifier, Notifier
from wifi_qr.payload import build_wifi_payload
from wifi_qr.render import IMAGE_MIMETYPE, render_png
from wifi_qr.records import InMemoryRecords

ENCRYPTION_TYPES = ("WPA", "WPA2", "WPA3", "WEP", "nopass")


@dataclass
class WifiCreateRequest:
    ssid: str
    password: str
    encryption: str
    hidden: bool

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "WifiCreateRequest":
        ssid = str(payload.get("ssid") or "")
        if not ssid.strip():
            raise ValueError("SSID is required")
        if len(ssid) > 32:
            raise ValueError("SSID cannot exceed 32 characters")

        encryption = str(payload.get("encryption") or "")
        if not encryption:
            raise ValueError("Encryption type is required")
        if encryption not in ENCRYPTION_TYPES:
            raise ValueError("Encryption must be one of: WPA, WPA2, WPA3, WEP, or nopass")

        password = str(payload.get("password") or "")
        if encryption == "nopass":
            if password:
                raise ValueError("Password should not be set for open networks")
        elif not password:
            raise ValueError("Password is required for encrypted networks")
        elif len(password) < 8:
            raise ValueError("Password cannot be less than 8 characters")
        elif len(password) > 63:
            raise ValueError("Password cannot exceed 63 characters")

        hidden = payload.get("hidden", False)
        if not isinstance(hidden, bool):
            raise ValueError("hidden must be true or false")

        return cls(ssid=ssid, password=password, encryption=encryption, hidden=hidden)


@dataclass
class BulkQrRequest:
    ids: List[str]

    @classmethod
    def from_payload(cls, payload: Mapping[str, object], max_ids: int) -> "BulkQrRequest":
        ids = payload.get("ids")
        if not ids:
            raise ValueError("At least one WiFi network ID is required")
        if not isinstance(ids, list):
            raise ValueError("ids must be a list")
        if len(ids) > max_ids:
            raise ValueError(f"Cannot download more than {max_ids} QR codes at once")
        if any(not isinstance(value, str) or not value.strip() for value in ids):
            raise ValueError("WiFi network ID cannot be empty")
        return cls(ids=[value.strip() for value in ids])


def _json_body() -> Dict[str, object]:
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        payload = {}
    return payload


def _send(download: Download):
    return send_file(
        io.BytesIO(download.content),
        mimetype=download.mimetype,
        as_attachment=True,
        download_name=download.filename,
    )


def create_app(
    records: Optional[InMemoryRecords] = None,
    settings: Optional[Settings] = None,
    notifier: Optional[Notifier] = None,
) -> Flask:
    """Build the Flask app.

    ``notifier`` is only used for the store created here; a caller passing
    ``records`` wires its notifier into that store itself.
    """
    if records is not None and notifier is not None:
        raise ValueError("pass the notifier to the records store, not to create_app")
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if records is None:
        records = InMemoryRecords(notifier=notifier or LoggingNotifier())

    app = Flask(__name__)

    @app.errorhandler(WifiQrError)
    def wifi_qr_error(exc: WifiQrError):
        app.logger.error("QR generation failed: %s", exc, extra={"error_code": exc.code})
        return jsonify({"message": str(exc), "error": exc.code}), 500

    @app.post("/api/wifi")
    def create_wifi():
        try:
            wifi_request = WifiCreateRequest.from_payload(_json_body())
        except ValueError as exc:
            return jsonify({"message": str(exc)}), 400
        record = records.create(
            wifi_request.ssid,
            password=wifi_request.password,
            encryption=wifi_request.encryption,
            hidden=wifi_request.hidden,
        )
        return jsonify(record.to_dict()), 201

    @app.get("/api/wifi")
    def list_wifi():
        return jsonify([record.to_dict() for record in records.all()])

    @app.get("/api/wifi/<record_id>")
    def get_wifi(record_id: str):
        record = records.lookup(record_id)
        if record is None:
            return jsonify({"message": "WiFi network not found"}), 404
        return jsonify(record.to_dict())

    @app.get("/api/wifi/<record_id>/qr")
    def download_qr(record_id: str):
        download = build_single(record_id, records)
        if download is None:
            return jsonify({"message": "WiFi network not found"}), 404
        return _send(download)

    @app.post("/api/wifi/bulk-qr")
    def download_bulk_qr():
        try:
            bulk_request = BulkQrRequest.from_payload(_json_body(), settings.max_bulk_ids)
        except ValueError as exc:
            return jsonify({"message": str(exc)}), 400
        download = build_archive(bulk_request.ids, records, max_workers=settings.render_workers)
        if download is None:
            return jsonify({"message": "No WiFi networks found"}), 404
        return _send(
            Download(content=download.content, mimetype=download.mimetype, filename=settings.archive_name)
        )

    @app.post("/api/wifi/qr-preview")
    def qr_preview():
        try:
            wifi_request = WifiCreateRequest.from_payload(_json_body())
        except ValueError as exc:
            return jsonify({"message": str(exc)}), 400
        payload = build_wifi_payload(
            wifi_request.ssid,
            password=wifi_request.password,
            auth=wifi_request.encryption,
            hidden=wifi_request.hidden,
        )
        return send_file(io.BytesIO(render_png(payload)), mimetype=IMAGE_MIMETYPE)

    return app


app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
