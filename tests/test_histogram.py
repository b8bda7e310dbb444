"""Tests for the histogram engine and image decoding."""

import numpy as np
import pytest

from conftest import make_image
from speedline.errors import DecodeError
from speedline.frame import BUCKETS, PillowImageDecoder, compute_histogram, encode_solid_jpeg


def test_uniform_image_has_single_bucket_per_channel():
    """Test a solid colour fills exactly one bucket per channel."""
    pixels = np.zeros((4, 5, 4), dtype=np.uint8)
    pixels[..., :3] = (12, 200, 255)
    pixels[..., 3] = 255

    histogram = compute_histogram(pixels)

    assert len(histogram) == 3
    for channel, value in zip(histogram, (12, 200, 255)):
        assert len(channel) == BUCKETS
        assert channel[value] == 20
        assert sum(channel) == 20
        assert sum(1 for count in channel if count) == 1


def test_histogram_counts_every_pixel():
    """Test each channel sums to the pixel count."""
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(37, 23, 4), dtype=np.uint8)

    histogram = compute_histogram(pixels)

    for index, channel in enumerate(histogram):
        assert sum(channel) == 37 * 23
        assert channel == tuple(np.bincount(pixels[..., index].ravel(), minlength=256))


def test_histogram_accepts_flat_samples_and_alpha():
    """Test (N, C) input and counting the alpha channel."""
    pixels = np.array([[0, 0, 0, 255], [255, 255, 255, 0]], dtype=np.uint8)

    histogram = compute_histogram(pixels, channels=4)

    assert len(histogram) == 4
    assert histogram[0][0] == 1 and histogram[0][255] == 1
    assert histogram[3][0] == 1 and histogram[3][255] == 1


def test_histogram_rejects_bad_input():
    """Test wrong dtype or too few channels raise ValueError."""
    with pytest.raises(ValueError):
        compute_histogram(np.zeros((2, 2, 3), dtype=np.float32))
    with pytest.raises(ValueError):
        compute_histogram(np.zeros((2, 2, 2), dtype=np.uint8))


def test_pillow_decoder_returns_rgba():
    """Test decoding yields (H, W, 4) uint8 samples."""
    decoder = PillowImageDecoder()
    data = make_image((255, 0, 0), size=(8, 6), fmt="PNG")

    pixels = decoder.decode(data)

    assert pixels.shape == (6, 8, 4)
    assert pixels.dtype == np.uint8
    assert (pixels[..., 0] == 255).all()
    assert (pixels[..., 3] == 255).all()
    assert decoder.size(data) == (8, 6)


def test_pillow_decoder_rejects_garbage():
    """Test unreadable buffers raise DecodeError."""
    decoder = PillowImageDecoder()

    with pytest.raises(DecodeError):
        decoder.decode(b"\x00\x01garbage")
    with pytest.raises(DecodeError):
        decoder.size(b"\x00\x01garbage")


def test_encode_solid_jpeg_is_white():
    """Test the synthesized white JPEG decodes to pure white."""
    data = encode_solid_jpeg((16, 9))

    pixels = PillowImageDecoder().decode(data)

    assert pixels.shape == (9, 16, 4)
    for channel in compute_histogram(pixels):
        assert sum(channel[250:]) == 16 * 9
