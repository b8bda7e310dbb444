"""Screenshot timeline extraction from DevTools traces.

Trace timestamps are microseconds; every timestamp exposed here is in
milliseconds on the same clock (``ts / 1000``). The time origin decides which
screenshots qualify and sets ``start_ts``.
"""

import asyncio
import base64
import binascii
import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import structlog

from ..config import Config, get_config
from ..errors import DecodeError, InvalidInputError, MalformedTraceError
from ..frame import Frame, encode_solid_jpeg
from .frame_differ import FrameDiffer
from .trace_loader import TraceSource, get_trace_events, load_trace

logger = structlog.get_logger()

WHITE = (255, 255, 255)


@dataclass
class TimelineResult:
    """Frames extracted from a trace, with the trace's time bounds."""

    start_ts: float
    end_ts: float
    frames: List[Frame] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Summarize the timeline for reporting."""
        return {
            "start_ts": self.start_ts,
            "end_ts": self.end_ts,
            "frame_count": len(self.frames),
            "frames": [
                {
                    "timestamp": frame.get_timestamp(),
                    "offset_ms": frame.get_timestamp() - self.start_ts,
                    "size_bytes": len(frame.get_image()),
                    "progress": frame.get_progress(),
                }
                for frame in self.frames
            ],
        }


def _event_ts(event: Any) -> Optional[float]:
    if not isinstance(event, dict):
        return None
    ts = event.get("ts")
    if isinstance(ts, numbers.Real) and not isinstance(ts, bool):
        return ts
    return None


def get_trace_bounds(events: List[Dict[str, Any]]) -> tuple:
    """Get the (earliest, latest) event timestamps in microseconds.

    Events stamped 0 (process and thread metadata) are ignored.

    Raises:
        MalformedTraceError: If no event carries a usable timestamp
    """
    timestamps = [ts for ts in map(_event_ts, events) if ts]
    if not timestamps:
        raise MalformedTraceError("Trace has no timestamped events")
    return min(timestamps), max(timestamps)


def _decode_snapshot(event: Dict[str, Any], snapshot_arg: str) -> bytes:
    payload = (event.get("args") or {}).get(snapshot_arg)
    if not isinstance(payload, str) or not payload:
        raise DecodeError(f"Screenshot event at ts={event.get('ts')} has no {snapshot_arg} payload")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise DecodeError(f"Base64 decode failed for screenshot at ts={event.get('ts')}: {e}") from e


def _resolve_time_origin(time_origin, options: Optional[Mapping[str, Any]]):
    if time_origin is None and options:
        time_origin = options.get("time_origin", options.get("timeOrigin"))
    if time_origin is None:
        return None
    if (
        not isinstance(time_origin, numbers.Real)
        or isinstance(time_origin, bool)
        or not math.isfinite(time_origin)
    ):
        raise InvalidInputError(f"time_origin must be a finite number, got {time_origin!r}")
    return time_origin


async def _synthesize_white_frame(first: Frame, timestamp: float, quality: int, channels: int) -> Frame:
    """Build a blank white frame matching the first screenshot's size."""
    image = await asyncio.to_thread(encode_solid_jpeg, first.get_image_size(), WHITE, quality)
    return Frame(image, timestamp, channels=channels)


async def extract_frames_from_timeline(
    timeline: TraceSource,
    time_origin: Optional[float] = None,
    config: Optional[Config] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> TimelineResult:
    """Extract deduplicated screenshot frames from a trace.

    Args:
        timeline: Trace file path, JSON text, or parsed trace
        time_origin: Origin in trace microseconds. Screenshots before it are
            dropped. Defaults to the earliest event timestamp. Any number
            given, 0 included, is used as is.
        config: Configuration instance. If None, uses global config.
        options: Alternative to keyword arguments, e.g. ``{"timeOrigin": ...}``

    Returns:
        TimelineResult with ``start_ts``, ``end_ts`` and ``frames``

    Raises:
        MalformedTraceError: If the trace has no events or no screenshots
        DecodeError: If a kept screenshot payload cannot be decoded
    """
    config = config or get_config()
    category = config.get("timeline.screenshot_category", "screenshot")
    snapshot_arg = config.get("timeline.snapshot_arg", "snapshot")
    channels = config.get("histogram.channels", 3)

    time_origin = _resolve_time_origin(time_origin, options)

    trace = await load_trace(timeline)
    events = get_trace_events(trace)
    min_ts, max_ts = get_trace_bounds(events)
    if time_origin is None:
        time_origin = min_ts

    differ = FrameDiffer()
    frames: List[Frame] = []
    for event in events:
        ts = _event_ts(event)
        if ts is None or ts < time_origin:
            continue
        if category not in str(event.get("cat", "")):
            continue

        image = _decode_snapshot(event, snapshot_arg)
        if not differ.should_keep_frame(image):
            continue

        try:
            frames.append(Frame(image, ts / 1000, channels=channels))
        except InvalidInputError as e:
            raise DecodeError(f"Unreadable screenshot image at ts={ts}: {e}") from e

    if not frames:
        raise MalformedTraceError("No screenshots found in trace")

    start_ts = time_origin / 1000
    end_ts = max_ts / 1000

    if config.get("timeline.synthesize_white_frame", True):
        quality = config.get("timeline.white_frame_quality", 90)
        frames.insert(0, await _synthesize_white_frame(frames[0], start_ts, quality, channels))

    logger.info(
        "frames_extracted",
        event_count=len(events),
        frame_count=len(frames),
        start_ts=start_ts,
        end_ts=end_ts,
        **differ.get_stats(),
    )

    return TimelineResult(start_ts=start_ts, end_ts=end_ts, frames=frames)
