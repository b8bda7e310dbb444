"""Trace input resolution.

A trace can be handed over as a path to a JSON file, as raw JSON text, or as
an already parsed object. Everything is resolved here so the extractor only
ever sees parsed data.
"""

import json
import os
from typing import Any, Dict, List, Union

import aiofiles
import structlog

from ..errors import MalformedTraceError

logger = structlog.get_logger()

TraceDocument = Union[Dict[str, Any], List[Dict[str, Any]]]
TraceSource = Union[str, bytes, os.PathLike, TraceDocument]


def _looks_like_json(text: str) -> bool:
    return text.lstrip()[:1] in ("{", "[")


def _parse_json(text: Union[str, bytes], origin: str) -> TraceDocument:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedTraceError(f"Invalid trace JSON in {origin}: {e}") from e


async def load_trace(source: TraceSource) -> TraceDocument:
    """Resolve a trace source to a parsed trace document.

    Args:
        source: File path, JSON text, or parsed trace (dict or event list)

    Returns:
        Parsed trace document

    Raises:
        FileNotFoundError: If a path is given and does not exist
        MalformedTraceError: If the content is not valid JSON
    """
    if isinstance(source, (dict, list)):
        return source

    if isinstance(source, (bytes, bytearray)):
        return _parse_json(bytes(source), "buffer")

    if isinstance(source, str) and _looks_like_json(source):
        return _parse_json(source, "string")

    if isinstance(source, (str, os.PathLike)):
        path = os.fspath(source)
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            text = await f.read()
        logger.debug("trace_file_read", path=path, size_bytes=len(text))
        return _parse_json(text, path)

    raise MalformedTraceError(f"Unsupported trace input type: {type(source).__name__}")


def get_trace_events(trace: TraceDocument) -> List[Dict[str, Any]]:
    """Get the event list of a trace.

    Object traces keep events under ``traceEvents``; array traces are the
    event list themselves.

    Raises:
        MalformedTraceError: If no event list is present
    """
    if isinstance(trace, dict):
        events = trace.get("traceEvents")
    else:
        events = trace

    if not isinstance(events, list):
        raise MalformedTraceError("Trace has no traceEvents array")
    return events
