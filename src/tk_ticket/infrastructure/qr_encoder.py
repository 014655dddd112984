"""QR code images for ticket IDs via the qrcode library."""

import io

import qrcode
from qrcode.constants import ERROR_CORRECT_H


class QrCodeEncoder:
    def __init__(self, box_size: int = 10, border: int = 1) -> None:
        self._box_size = box_size
        self._border = border

    def encode(self, payload: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECT_H,
            box_size=self._box_size,
            border=self._border,
        )
        qr.add_data(payload)
        qr.make(fit=True)
        image = qr.make_image(fill_color="black", back_color="white")
        buffer = io.BytesIO()
        image.save(buffer)
        return buffer.getvalue()
