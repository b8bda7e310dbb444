"""Per-channel intensity histograms."""

from typing import Tuple

import numpy as np

BUCKETS = 256

# One tuple of 256 counts per colour channel
Histogram = Tuple[Tuple[int, ...], ...]


def compute_histogram(pixels: np.ndarray, channels: int = 3) -> Histogram:
    """Count pixel intensities per channel.

    Args:
        pixels: uint8 samples shaped (H, W, C) or (N, C)
        channels: Number of leading channels to count (3 ignores alpha)

    Returns:
        Histogram with ``channels`` distributions of 256 counts each. Every
        distribution sums to the number of pixels in ``pixels``.
    """
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 samples, got {pixels.dtype}")
    if pixels.ndim not in (2, 3) or pixels.shape[-1] < channels:
        raise ValueError(f"Expected at least {channels} channels, got shape {pixels.shape}")

    flat = pixels.reshape(-1, pixels.shape[-1])
    return tuple(
        tuple(np.bincount(flat[:, channel], minlength=BUCKETS).tolist())
        for channel in range(channels)
    )
