"""Shared fixtures: generated images and synthetic DevTools traces."""

import base64
import io

import pytest
from PIL import Image

from speedline.config import Config

SCREENSHOT_CAT = "disabled-by-default-devtools.screenshot"

# Timestamps (microseconds) of the progressive app trace
TRACE_START = 103204916772
LATE_ORIGIN = 103206183179
TRACE_END = 103207000000


def make_image(color, size=(32, 24), fmt="JPEG") -> bytes:
    """Encode a solid colour image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, fmt)
    return buffer.getvalue()


def screenshot_event(ts, image: bytes) -> dict:
    return {
        "cat": SCREENSHOT_CAT,
        "name": "Screenshot",
        "ph": "O",
        "ts": ts,
        "args": {"snapshot": base64.b64encode(image).decode("ascii")},
    }


@pytest.fixture
def config(tmp_path):
    """Isolated configuration backed by a non-existent settings file."""
    return Config(config_path=tmp_path / "settings.json")


@pytest.fixture
def black_jpeg():
    return make_image((0, 0, 0), size=(64, 64))


@pytest.fixture
def grayscale_png():
    """Horizontal gray ramp from 0 to 200, no white pixels."""
    img = Image.new("RGB", (201, 10))
    img.putdata([(x, x, x) for _ in range(10) for x in range(201)])
    buffer = io.BytesIO()
    img.save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def rainbow_png():
    """Saturated red, green and blue stripes."""
    img = Image.new("RGB", (30, 10))
    stripes = [(255, 0, 0)] * 10 + [(0, 255, 0)] * 10 + [(0, 0, 255)] * 10
    img.putdata(stripes * 10)
    buffer = io.BytesIO()
    img.save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def progressive_trace():
    """Trace of a page that paints progressively.

    Five distinct screenshots (two runs of duplicates) follow the start
    event; three distinct ones are at or after LATE_ORIGIN.
    """
    a = make_image((10, 10, 10))
    b = make_image((80, 80, 80))
    c = make_image((150, 120, 90))
    d = make_image((200, 60, 60))
    e = make_image((240, 240, 240))
    return {
        "traceEvents": [
            {"cat": "__metadata", "name": "process_name", "ph": "M", "ts": 0, "args": {}},
            {"cat": "devtools.timeline", "name": "TracingStartedInPage", "ph": "I", "ts": TRACE_START},
            screenshot_event(103205000000, a),
            screenshot_event(103205100000, a),
            screenshot_event(103205500000, b),
            {"cat": "blink.user_timing", "name": "navigationStart", "ph": "R", "ts": 103205600000},
            screenshot_event(LATE_ORIGIN, c),
            screenshot_event(103206300000, d),
            screenshot_event(103206400000, d),
            screenshot_event(103206500000, e),
            {"cat": "devtools.timeline", "name": "Paint", "ph": "X", "ts": TRACE_END},
        ]
    }
