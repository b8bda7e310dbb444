"""speedline - screenshot timelines and histograms from DevTools traces."""

from .config import Config, get_config
from .errors import DecodeError, InvalidInputError, MalformedTraceError, SpeedlineError
from .frame import Frame, PillowImageDecoder, compute_histogram, compute_histograms
from .timeline import (
    FrameDiffer,
    TimelineResult,
    are_equal,
    extract_frames_from_timeline,
    load_trace,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "DecodeError",
    "Frame",
    "FrameDiffer",
    "InvalidInputError",
    "MalformedTraceError",
    "PillowImageDecoder",
    "SpeedlineError",
    "TimelineResult",
    "are_equal",
    "compute_histogram",
    "compute_histograms",
    "extract_frames_from_timeline",
    "get_config",
    "load_trace",
]
