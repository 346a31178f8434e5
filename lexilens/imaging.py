"""Deterministic image preprocessing before forwarding to a vision model."""

import base64
import io

from PIL import Image, UnidentifiedImageError

import config
from lexilens.errors import InvalidImageError


def preprocess_image(data: bytes, quality: int = config.JPEG_QUALITY) -> bytes:
    """
    Convert an uploaded image to grayscale and re-encode it as progressive JPEG.

    Args:
        data: Raw uploaded bytes
        quality: JPEG quality (1-95)

    Returns:
        JPEG-encoded bytes

    Raises:
        InvalidImageError: If the bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            gray = img.convert("L")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise InvalidImageError(f"Could not decode image: {e}") from e

    buffer = io.BytesIO()
    gray.save(buffer, format="JPEG", quality=quality, progressive=True)
    return buffer.getvalue()


def to_data_url(jpeg: bytes) -> str:
    """Encode JPEG bytes as a base64 data URL."""
    encoded = base64.b64encode(jpeg).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"
