"""Wi-Fi credential QR code toolkit."""

from .archive import Download, build_archive, build_single
from .errors import BatchCancelled, EncodingOverflow, RenderFailure, WifiQrError
from .payload import build_wifi_payload
from .records import CredentialRecord, InMemoryRecords
from .render import render_png

__all__ = [
    "BatchCancelled",
    "CredentialRecord",
    "Download",
    "EncodingOverflow",
    "InMemoryRecords",
    "RenderFailure",
    "WifiQrError",
    "build_archive",
    "build_single",
    "build_wifi_payload",
    "render_png",
]
