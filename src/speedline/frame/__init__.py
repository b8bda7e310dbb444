"""Frame model, histogram engine and image decoding."""

from .frame import Frame, compute_histograms
from .histogram import BUCKETS, Histogram, compute_histogram
from .image_decoder import ImageDecoder, PillowImageDecoder, encode_solid_jpeg

__all__ = [
    "BUCKETS",
    "Frame",
    "Histogram",
    "ImageDecoder",
    "PillowImageDecoder",
    "compute_histogram",
    "compute_histograms",
    "encode_solid_jpeg",
]
