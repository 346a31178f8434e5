"""Tests for image preprocessing."""

import base64
import io

import pytest
from PIL import Image

from lexilens.errors import InvalidImageError
from lexilens.imaging import preprocess_image, to_data_url


def test_output_is_grayscale_jpeg(png_bytes):
    result = preprocess_image(png_bytes)

    with Image.open(io.BytesIO(result)) as img:
        assert img.format == "JPEG"
        assert img.mode == "L"
        assert img.size == (32, 16)


def test_preprocessing_is_deterministic(png_bytes):
    assert preprocess_image(png_bytes) == preprocess_image(png_bytes)


def test_rgba_input_supported():
    img = Image.new("RGBA", (8, 8), color=(0, 0, 255, 128))
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")

    with Image.open(io.BytesIO(preprocess_image(buffer.getvalue()))) as out:
        assert out.mode == "L"


def test_garbage_raises_invalid_image():
    with pytest.raises(InvalidImageError):
        preprocess_image(b"\x00\x01not an image")


def test_oversized_image_raises_invalid_image(png_bytes, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

    with pytest.raises(InvalidImageError):
        preprocess_image(png_bytes)


def test_data_url_round_trips():
    url = to_data_url(b"\xff\xd8abc")
    assert url.startswith("data:image/jpeg;base64,")
    assert base64.b64decode(url.split(",", 1)[1]) == b"\xff\xd8abc"
