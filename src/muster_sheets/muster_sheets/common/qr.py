from __future__ import annotations

import io
from typing import BinaryIO, Optional

import qrcode
from PIL import Image
from pyzbar.pyzbar import decode as pyzbar_decode


def render_qr_png(data: str, *, box_size: int = 10, border: int = 2) -> bytes:
    """PNG bytes of a QR code for `data` (a raw receipt hash or a share link)."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_qr_image(stream: BinaryIO) -> Optional[str]:
    """First QR payload found in an uploaded image, or None."""
    img = Image.open(stream).convert("RGB")
    decoded = pyzbar_decode(img)
    if not decoded:
        return None
    return decoded[0].data.decode("utf-8").strip()
