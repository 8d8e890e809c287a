"""Single and bulk QR downloads for stored Wi-Fi records."""

from __future__ import annotations

import io
import logging
import re
import threading
import zipfile
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .errors import BatchCancelled
from .records import CredentialRecord, RecordLookup, RecordLookupError
from .render import IMAGE_EXTENSION, IMAGE_MIMETYPE, render_record

logger = logging.getLogger(__name__)

ARCHIVE_MIMETYPE = "application/zip"
ARCHIVE_NAME = "wifi-qrcodes.zip"
SINGLE_NAME = f"qrcode.{IMAGE_EXTENSION}"
COMPRESS_LEVEL = 6
# Fixed entry timestamp keeps archives reproducible.
ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)

_ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

Renderer = Callable[[CredentialRecord], bytes]


@dataclass(frozen=True)
class Download:
    content: bytes
    mimetype: str
    filename: str


def sanitize_filename(name: str) -> str:
    """Replace characters that are illegal in Windows or POSIX file names."""
    return _ILLEGAL_FILENAME_CHARS.sub("_", name)


def entry_name(record: CredentialRecord) -> str:
    return f"{sanitize_filename(record.ssid)}_{record.id}.{IMAGE_EXTENSION}"


def build_single(
    identifier: str,
    records: RecordLookup,
    *,
    render: Renderer = render_record,
) -> Optional[Download]:
    """Render the QR code for one record, or return ``None`` if it is unknown."""
    try:
        record = records.lookup(identifier)
    except RecordLookupError:
        logger.warning("Lookup failed; treating as missing", exc_info=True, extra={"record_id": identifier})
        record = None
    if record is None:
        return None
    return Download(content=render(record), mimetype=IMAGE_MIMETYPE, filename=SINGLE_NAME)


def _check_cancel(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise BatchCancelled("archive build cancelled")


def resolve_records(
    identifiers: Sequence[str],
    records: RecordLookup,
    cancel: Optional[threading.Event] = None,
) -> List[CredentialRecord]:
    """Resolve ``identifiers`` in input order, dropping the ones that miss."""
    _check_cancel(cancel)
    try:
        found = records.lookup_many(identifiers)
    except RecordLookupError:
        logger.warning("Batch lookup failed; treating all identifiers as missing", exc_info=True)
        found = {}

    resolved: List[CredentialRecord] = []
    for identifier in identifiers:
        _check_cancel(cancel)
        record = found.get(identifier)
        if record is None:
            logger.debug("Skipping unknown record", extra={"record_id": identifier})
            continue
        resolved.append(record)
    return resolved


def build_archive(
    identifiers: Sequence[str],
    records: RecordLookup,
    *,
    render: Renderer = render_record,
    max_workers: int = 4,
    cancel: Optional[threading.Event] = None,
) -> Optional[Download]:
    """Build a ZIP holding one PNG per resolved record.

    Returns ``None`` when no identifier resolves. Images are rendered
    concurrently but written in input order. A render error aborts the whole
    archive; setting ``cancel`` raises :class:`BatchCancelled` at the next
    identifier boundary. In both cases no partial archive is returned.

    On cancellation queued renders are dropped and the call returns without
    waiting for renders already running. ``records.lookup_many`` is a single
    blocking call, so cancellation is observed before and after it.
    """
    resolved = resolve_records(identifiers, records, cancel)
    if not resolved:
        logger.info("No records resolved for archive", extra={"entry_count": 0})
        return None

    buffer = io.BytesIO()
    executor = ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="wifi-qr")
    wait = True
    try:
        futures: List[Future] = []
        for record in resolved:
            _check_cancel(cancel)
            futures.append(executor.submit(render, record))

        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for record, future in zip(resolved, futures):
                _check_cancel(cancel)
                image = future.result()
                info = zipfile.ZipInfo(entry_name(record), date_time=ENTRY_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                archive.writestr(info, image, compresslevel=COMPRESS_LEVEL)
    except BatchCancelled:
        wait = False
        raise
    finally:
        executor.shutdown(wait=wait, cancel_futures=True)

    logger.info("Built QR archive", extra={"entry_count": len(resolved)})
    return Download(content=buffer.getvalue(), mimetype=ARCHIVE_MIMETYPE, filename=ARCHIVE_NAME)
