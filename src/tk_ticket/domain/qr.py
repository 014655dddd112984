"""QR encoder seam: the renderer only needs PNG bytes for a payload."""

from typing import Protocol


class QrEncoderProtocol(Protocol):
    def encode(self, payload: str) -> bytes:
        """Return a PNG image of payload encoded at error-correction level H."""
        ...
