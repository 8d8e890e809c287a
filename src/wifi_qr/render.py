"""Render Wi-Fi payloads as PNG QR codes."""

from __future__ import annotations

import io
from typing import Sequence

import qrcode
from PIL import Image, ImageDraw
from qrcode.constants import ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError

from .errors import EncodingOverflow, RenderFailure
from .payload import payload_for_record
from .records import CredentialRecord

BOX_SIZE = 20
BORDER = 4
IMAGE_FORMAT = "PNG"
IMAGE_MIMETYPE = "image/png"
IMAGE_EXTENSION = "png"


def create_qr_code(data: str) -> qrcode.QRCode:
    """Encode ``data`` at error-correction level Q using the smallest version."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_Q,
        box_size=BOX_SIZE,
        border=BORDER,
    )
    qr.add_data(data)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        # qrcode 8 fails the version-41 check with ValueError
        raise EncodingOverflow(len(data)) from exc
    return qr


def render_matrix(matrix: Sequence[Sequence[bool]], box_size: int = BOX_SIZE) -> Image.Image:
    """Draw a module matrix (quiet zone included) as a 1-bit image."""
    size = len(matrix)
    image = Image.new("1", (size * box_size, size * box_size), 255)
    draw = ImageDraw.Draw(image)
    for y, row in enumerate(matrix):
        for x, cell in enumerate(row):
            if not cell:
                continue
            left = x * box_size
            top = y * box_size
            # rectangle() bounds are inclusive
            draw.rectangle((left, top, left + box_size - 1, top + box_size - 1), fill=0)
    return image


def render_png(payload: str) -> bytes:
    """Return the PNG bytes of the QR code for ``payload``.

    Output depends only on ``payload``: no metadata chunks are written, so two
    renders of the same payload are byte-identical.
    """
    qr_code = create_qr_code(payload)
    matrix = tuple(tuple(row) for row in qr_code.get_matrix())
    try:
        image = render_matrix(matrix)
        buffer = io.BytesIO()
        image.save(buffer, format=IMAGE_FORMAT)
    except (OSError, ValueError) as exc:
        raise RenderFailure(f"could not render QR image: {exc}") from exc
    return buffer.getvalue()


def render_record(record: CredentialRecord) -> bytes:
    return render_png(payload_for_record(record))
