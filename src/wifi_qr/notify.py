"""Creation notifications for Wi-Fi records.

Notification is fire-and-log: a failing notifier is reported as a warning
and never fails the create that triggered it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

from .records import CredentialRecord

logger = logging.getLogger(__name__)


@dataclass
class WifiQrCreatedMessage:
    wifi_id: str
    ssid: str
    encryption: str
    hidden: bool
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    created_by: str = "System"
    metadata: Optional[Dict[str, str]] = None

    @classmethod
    def from_record(cls, record: CredentialRecord, created_by: str = "System") -> "WifiQrCreatedMessage":
        return cls(
            wifi_id=record.id,
            ssid=record.ssid,
            encryption=record.encryption,
            hidden=record.hidden,
            created_by=created_by,
        )

    def to_dict(self) -> Dict[str, object]:
        body: Dict[str, object] = {
            "wifiId": self.wifi_id,
            "ssid": self.ssid,
            "encryption": self.encryption,
            "hidden": self.hidden,
            "createdAt": self.created_at.isoformat(),
            "createdBy": self.created_by,
        }
        if self.metadata is not None:
            body["metadata"] = dict(self.metadata)
        return body


class Notifier(Protocol):
    def send(self, message: WifiQrCreatedMessage) -> None:
        ...


class LoggingNotifier:
    """Notifier that writes each message to the ``wifi_qr.notify`` logger."""

    def send(self, message: WifiQrCreatedMessage) -> None:
        logger.info(json.dumps(message.to_dict()), extra={"record_id": message.wifi_id})


def notify_created(notifier: Notifier, record: CredentialRecord, created_by: str = "System") -> bool:
    """Send a creation message; return ``False`` if the notifier failed."""
    message = WifiQrCreatedMessage.from_record(record, created_by=created_by)
    try:
        notifier.send(message)
    except Exception:
        logger.warning(
            "Creation notification failed",
            exc_info=True,
            extra={"record_id": record.id, "error_code": "NOTIFY_FAILED"},
        )
        return False
    return True
