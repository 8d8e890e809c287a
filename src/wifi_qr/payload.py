"""Wi-Fi QR payload helpers."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .records import CredentialRecord


def escape_field(value: str) -> str:
    """Escape backslashes and semicolons inside an SSID or password."""
    return value.replace("\\", "\\\\").replace(";", r"\;")


def build_wifi_payload(
    ssid: str, password: Optional[str] = "", auth: str = "WPA", hidden: bool = False
) -> str:
    """Return the Wi-Fi QR payload string.

    Fields are always written in ``T``, ``S``, ``P``, ``H`` order. ``auth`` is
    emitted as given; colons and commas are left unescaped because that is what
    common phone readers expect.
    """
    parts = [f"WIFI:T:{auth};", f"S:{escape_field(ssid)};"]
    if password:
        parts.append(f"P:{escape_field(password)};")
    if hidden:
        parts.append("H:true;")
    parts.append(";")
    return "".join(parts)


def payload_for_record(record: "CredentialRecord") -> str:
    return build_wifi_payload(
        record.ssid,
        password=record.password,
        auth=record.encryption,
        hidden=record.hidden,
    )
