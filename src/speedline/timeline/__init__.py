"""Trace loading and screenshot timeline extraction."""

from .extractor import TimelineResult, extract_frames_from_timeline, get_trace_bounds
from .frame_differ import FrameDiffer, are_equal
from .trace_loader import get_trace_events, load_trace

__all__ = [
    "FrameDiffer",
    "TimelineResult",
    "are_equal",
    "extract_frames_from_timeline",
    "get_trace_bounds",
    "get_trace_events",
    "load_trace",
]
