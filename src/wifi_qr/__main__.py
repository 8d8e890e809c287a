"""Command line interface for generating Wi-Fi QR codes."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from . import archive, render
from .config import get_settings
from .errors import WifiQrError
from .log import setup_logging
from .payload import build_wifi_payload
from .records import CredentialRecord, InMemoryRecords


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate Wi-Fi QR codes as PNG images")
    source_group = parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("--ssid", help="Wi-Fi SSID")
    source_group.add_argument("--batch", type=Path, help="JSON file with a list of Wi-Fi records to archive")

    parser.add_argument("--password", help="Wi-Fi password", default="")
    parser.add_argument("--auth", help="Wi-Fi authentication (WPA/WPA2/WPA3/WEP/nopass)", default="WPA")
    parser.add_argument("--hidden", action="store_true", help="Mark Wi-Fi network as hidden")

    parser.add_argument("-o", "--output", type=Path, help="Output file (PNG, or ZIP with --batch)")
    parser.add_argument("--log-level", default=None, help="Logging level (defaults to WIFI_QR_LOG_LEVEL)")
    return parser


def load_records(path: Path) -> List[CredentialRecord]:
    """Read records from a JSON list; missing ids are numbered from 1.

    Ids must be unique after numbering, otherwise a record would be lost.
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise SystemExit(f"{path} must contain a JSON list of records")
    records = []
    seen = set()
    for index, item in enumerate(raw, start=1):
        if not isinstance(item, dict) or not item.get("ssid"):
            raise SystemExit(f"record #{index} in {path} needs an 'ssid'")
        record_id = str(item.get("id") or index)
        if record_id in seen:
            raise SystemExit(f"record #{index} in {path} reuses id '{record_id}'")
        seen.add(record_id)
        hidden = item.get("hidden", False)
        if not isinstance(hidden, bool):
            raise SystemExit(f"record #{index} in {path}: 'hidden' must be true or false")
        records.append(
            CredentialRecord(
                id=record_id,
                ssid=str(item["ssid"]),
                password=str(item.get("password") or ""),
                encryption=str(item.get("encryption") or "WPA"),
                hidden=hidden,
            )
        )
    return records


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level, settings.log_format)

    try:
        if args.batch is not None:
            store = InMemoryRecords(load_records(args.batch))
            ids = [record.id for record in store.all()]
            download = archive.build_archive(ids, store, max_workers=settings.render_workers)
            if download is None:
                parser.exit(1, f"No records found in {args.batch}\n")
            output = args.output or Path(settings.archive_name)
            output.write_bytes(download.content)
        else:
            payload = build_wifi_payload(args.ssid, password=args.password, auth=args.auth, hidden=args.hidden)
            output = args.output or Path("qr_code.png")
            output.write_bytes(render.render_png(payload))
    except WifiQrError as exc:
        parser.exit(2, f"error: {exc}\n")
    parser.exit(0, f"Saved QR code to {output}\n")


if __name__ == "__main__":
    main()
