"""Error types raised by the Wi-Fi QR pipeline."""

from __future__ import annotations


class WifiQrError(Exception):
    """Base class for failures that abort a render or archive call."""

    code = "WIFI_QR_ERROR"


class EncodingOverflow(WifiQrError):
    """The payload does not fit in any QR version at the chosen EC level."""

    code = "ENCODING_OVERFLOW"

    def __init__(self, length: int) -> None:
        super().__init__(f"payload of {length} characters exceeds QR capacity")
        self.length = length


class RenderFailure(WifiQrError):
    code = "RENDER_FAILURE"


class BatchCancelled(WifiQrError):
    code = "BATCH_CANCELLED"
