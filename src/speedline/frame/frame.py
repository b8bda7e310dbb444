"""Screenshot frame model."""

import asyncio
import math
import numbers
from typing import Optional, Tuple

import structlog

from ..errors import DecodeError, InvalidInputError
from .histogram import Histogram, compute_histogram
from .image_decoder import ImageDecoder, default_decoder

logger = structlog.get_logger()


def _is_finite_number(value) -> bool:
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class Frame:
    """One screenshot from a trace, paired with its timestamp.

    The encoded image and the timestamp are fixed at construction. The
    histogram is computed on first request and cached; progress is a free
    slot for downstream metrics (e.g. visual progress for Speed Index).
    """

    def __init__(
        self,
        image_data: bytes,
        timestamp: float,
        decoder: Optional[ImageDecoder] = None,
        channels: int = 3,
    ):
        """Initialize frame.

        Args:
            image_data: Encoded image (JPEG, PNG, ...)
            timestamp: Frame time in milliseconds
            decoder: Image decoder; defaults to the Pillow decoder
            channels: Colour channels counted by the histogram

        Raises:
            InvalidInputError: If the image is empty or unreadable, or the
                timestamp is not a finite number
        """
        if not isinstance(image_data, (bytes, bytearray, memoryview)):
            raise InvalidInputError(
                f"Image data must be bytes, got {type(image_data).__name__}"
            )
        if len(image_data) == 0:
            raise InvalidInputError("Image data is empty")
        if not _is_finite_number(timestamp):
            raise InvalidInputError(f"Timestamp must be a finite number, got {timestamp!r}")

        self._image_data = bytes(image_data)
        self._timestamp = timestamp
        self._decoder = decoder or default_decoder
        self._channels = channels

        try:
            self._size = self._decoder.size(self._image_data)
        except DecodeError as e:
            raise InvalidInputError(str(e)) from e

        self._progress: float = 0
        self._histogram: Optional[Histogram] = None
        self._histogram_lock = asyncio.Lock()

    @classmethod
    def create(
        cls,
        image_data: bytes,
        timestamp: float,
        decoder: Optional[ImageDecoder] = None,
    ) -> "Frame":
        """Create a frame from an encoded image and a timestamp."""
        return cls(image_data, timestamp, decoder=decoder)

    @property
    def image_data(self) -> bytes:
        return self._image_data

    @property
    def timestamp(self) -> float:
        return self._timestamp

    def get_image(self) -> bytes:
        """Get the encoded image buffer."""
        return self._image_data

    def get_image_size(self) -> Tuple[int, int]:
        """Get (width, height) of the image."""
        return self._size

    def get_timestamp(self) -> float:
        """Get the timestamp exactly as given at construction."""
        return self._timestamp

    def get_progress(self) -> float:
        """Get the last progress value set, or 0."""
        return self._progress

    def set_progress(self, value: float) -> None:
        """Set the progress value.

        Raises:
            InvalidInputError: If value is not a finite number
        """
        if not _is_finite_number(value):
            raise InvalidInputError(f"Progress must be a finite number, got {value!r}")
        self._progress = value

    async def get_histogram(self) -> Histogram:
        """Get the per-channel histogram, computing it on first call.

        Decoding runs in a worker thread. Concurrent callers wait for the
        same computation; a failed computation is not cached.

        Raises:
            DecodeError: If the image cannot be decoded
        """
        if self._histogram is not None:
            return self._histogram

        async with self._histogram_lock:
            if self._histogram is None:
                self._histogram = await asyncio.to_thread(self._compute_histogram)
                logger.debug(
                    "histogram_computed",
                    timestamp=self._timestamp,
                    width=self._size[0],
                    height=self._size[1],
                )
        return self._histogram

    def _compute_histogram(self) -> Histogram:
        pixels = self._decoder.decode(self._image_data)
        return compute_histogram(pixels, channels=self._channels)

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the full image."""
        return (
            f"Frame(timestamp={self._timestamp}, "
            f"size={self._size[0]}x{self._size[1]}, "
            f"bytes={len(self._image_data)}, "
            f"progress={self._progress})"
        )


async def compute_histograms(frames) -> list:
    """Compute histograms for several frames concurrently.

    Returns:
        Histograms in the same order as ``frames``
    """
    return list(await asyncio.gather(*(frame.get_histogram() for frame in frames)))
