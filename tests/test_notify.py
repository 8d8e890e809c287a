"""Creation notifications never fail the create."""

import json
import logging

from wifi_qr.notify import LoggingNotifier, WifiQrCreatedMessage, notify_created
from wifi_qr.records import InMemoryRecords


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def send(self, message):
        self.messages.append(message)


class FailingNotifier:
    def send(self, message):
        raise ConnectionError("queue down")


def test_create_sends_message():
    notifier = RecordingNotifier()
    record = InMemoryRecords(notifier=notifier).create("Home", "pass1234", "WPA2", hidden=True)
    [message] = notifier.messages
    assert message.wifi_id == record.id
    assert message.encryption == "WPA2"
    assert message.hidden is True


def test_failing_notifier_is_logged_not_raised(caplog):
    store = InMemoryRecords(notifier=FailingNotifier())
    with caplog.at_level(logging.WARNING, logger="wifi_qr.notify"):
        record = store.create("Home", "pass1234")
    assert store.lookup(record.id) == record
    assert "Creation notification failed" in caplog.text


def test_notify_created_reports_failure(home):
    assert notify_created(FailingNotifier(), home) is False
    assert notify_created(RecordingNotifier(), home) is True


def test_message_uses_camel_case_keys(home):
    body = WifiQrCreatedMessage.from_record(home).to_dict()
    assert body["wifiId"] == "a1"
    assert body["createdBy"] == "System"
    assert "metadata" not in body


def test_logging_notifier_writes_json(home, caplog):
    with caplog.at_level(logging.INFO, logger="wifi_qr.notify"):
        LoggingNotifier().send(WifiQrCreatedMessage.from_record(home))
    assert json.loads(caplog.records[-1].getMessage())["ssid"] == "Home"
