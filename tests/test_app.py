"""Flask routes over the QR pipeline."""

import io
import zipfile

import pytest

from app import create_app
from wifi_qr.config import Settings
from wifi_qr.records import InMemoryRecords


@pytest.fixture
def client(store):
    app = create_app(records=store, settings=Settings(max_bulk_ids=3))
    app.config.update(TESTING=True)
    return app.test_client()


def test_download_qr_returns_png(client):
    response = client.get("/api/wifi/a1/qr")
    assert response.status_code == 200
    assert response.mimetype == "image/png"
    assert response.data[:8] == b"\x89PNG\r\n\x1a\n"


def test_download_qr_unknown_id_is_404(client):
    assert client.get("/api/wifi/nope/qr").status_code == 404


def test_bulk_qr_returns_zip_of_resolved_records(client):
    response = client.post("/api/wifi/bulk-qr", json={"ids": ["a1", "gone", "c3"]})
    assert response.status_code == 200
    assert response.mimetype == "application/zip"
    assert "wifi-qrcodes.zip" in response.headers["Content-Disposition"]
    with zipfile.ZipFile(io.BytesIO(response.data)) as archive:
        assert archive.namelist() == ["Home_a1.png", "Guest_c3.png"]


def test_bulk_qr_nothing_resolved_is_404(client):
    assert client.post("/api/wifi/bulk-qr", json={"ids": ["x"]}).status_code == 404


@pytest.mark.parametrize(
    "body",
    [{}, {"ids": []}, {"ids": ["a", "b", "c", "d"]}, {"ids": ["a1", " "]}, {"ids": "a1"}],
)
def test_bulk_qr_rejects_bad_id_lists(client, body):
    assert client.post("/api/wifi/bulk-qr", json=body).status_code == 400


def test_create_then_download(store):
    app = create_app(records=store, settings=Settings())
    client = app.test_client()
    response = client.post(
        "/api/wifi", json={"ssid": "Attic", "password": "hunter22", "encryption": "WPA3", "hidden": True}
    )
    assert response.status_code == 201
    record_id = response.get_json()["id"]
    assert client.get(f"/api/wifi/{record_id}").get_json()["hidden"] is True
    assert client.get(f"/api/wifi/{record_id}/qr").status_code == 200
    assert len(client.get("/api/wifi").get_json()) == 3


@pytest.mark.parametrize(
    "body, message",
    [
        ({"encryption": "WPA", "password": "pass1234"}, "SSID is required"),
        ({"ssid": "x" * 33, "encryption": "WPA", "password": "pass1234"}, "SSID cannot exceed 32 characters"),
        ({"ssid": "Home", "encryption": "WPA9", "password": "pass1234"}, "Encryption must be one of"),
        ({"ssid": "Home", "encryption": "WPA"}, "Password is required"),
        ({"ssid": "Home", "encryption": "WPA", "password": "short"}, "less than 8"),
        ({"ssid": "Home", "encryption": "nopass", "password": "pass1234"}, "should not be set"),
    ],
)
def test_create_validation(client, body, message):
    response = client.post("/api/wifi", json=body)
    assert response.status_code == 400
    assert message in response.get_json()["message"]


def test_get_unknown_record_is_404(client):
    assert client.get("/api/wifi/unknown").status_code == 404


def test_preview_renders_without_storing():
    records = InMemoryRecords()
    client = create_app(records=records, settings=Settings()).test_client()
    response = client.post("/api/wifi/qr-preview", json={"ssid": "Guest", "encryption": "nopass"})
    assert response.status_code == 200
    assert response.mimetype == "image/png"
    assert len(records) == 0


def test_render_errors_become_500(client, monkeypatch):
    import app as app_module
    from wifi_qr.errors import EncodingOverflow

    def overflow(payload):
        raise EncodingOverflow(len(payload))

    monkeypatch.setattr(app_module, "render_png", overflow)
    response = client.post("/api/wifi/qr-preview", json={"ssid": "Guest", "encryption": "nopass"})
    assert response.status_code == 500
    assert response.get_json()["error"] == "ENCODING_OVERFLOW"


def test_create_rejects_blank_ssid(client):
    response = client.post("/api/wifi", json={"ssid": "   ", "encryption": "nopass"})
    assert response.status_code == 400
    assert response.get_json()["message"] == "SSID is required"


def test_notifier_with_existing_store_is_rejected(store):
    from wifi_qr.notify import LoggingNotifier

    with pytest.raises(ValueError):
        create_app(records=store, settings=Settings(), notifier=LoggingNotifier())
