"""Image decoding for screenshot frames.

Frames hold the encoded screenshot exactly as it appears in the trace. This
module is the only place that turns those bytes into pixels, and the only
place that produces new encoded images (the synthesized white frame).
"""

import io
from typing import Protocol, Tuple

import numpy as np
import structlog
from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError

logger = structlog.get_logger()

_PIL_ERRORS = (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError)


class ImageDecoder(Protocol):
    """Turns an encoded image buffer into RGBA samples."""

    def decode(self, data: bytes) -> np.ndarray:
        """Return an (height, width, 4) uint8 array."""
        ...

    def size(self, data: bytes) -> Tuple[int, int]:
        """Return (width, height) without decoding pixel data."""
        ...


class PillowImageDecoder:
    """Image decoder backed by Pillow.

    Accepts anything Pillow can open (JPEG, PNG, WebP, ...) and always
    yields RGBA samples regardless of the source mode.
    """

    def decode(self, data: bytes) -> np.ndarray:
        """Decode an image buffer to RGBA samples.

        Args:
            data: Encoded image bytes

        Returns:
            RGBA image as np.ndarray (H, W, 4), dtype=uint8

        Raises:
            DecodeError: If Pillow cannot read the image
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                rgba = img.convert("RGBA")
        except _PIL_ERRORS as e:
            raise DecodeError(f"Failed to decode image ({len(data)} bytes): {e}") from e

        pixels = np.asarray(rgba, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise DecodeError(f"Invalid image shape after decode: {pixels.shape}")
        return pixels

    def size(self, data: bytes) -> Tuple[int, int]:
        """Read image dimensions from the header.

        Raises:
            DecodeError: If the header is not a recognised image format
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                return img.size
        except _PIL_ERRORS as e:
            raise DecodeError(f"Unrecognised image header: {e}") from e


def encode_solid_jpeg(
    size: Tuple[int, int],
    color: Tuple[int, int, int] = (255, 255, 255),
    quality: int = 90,
) -> bytes:
    """Encode a solid colour RGB JPEG of the given (width, height)."""
    img = Image.new("RGB", size, color)
    buffer = io.BytesIO()
    img.save(buffer, "JPEG", quality=quality)
    data = buffer.getvalue()
    logger.debug("solid_jpeg_encoded", width=size[0], height=size[1], size_bytes=len(data))
    return data


default_decoder = PillowImageDecoder()
