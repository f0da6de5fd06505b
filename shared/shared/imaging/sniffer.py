"""
Content-based type detection. The declared extension and Content-Type
header are never trusted; the bytes decide.
"""
from __future__ import annotations

import io

from PIL import Image, UnidentifiedImageError

from shared.imaging.constants import JPEG_FORMATS, UNKNOWN_CONTENT_TYPE


def detect_content_type(data: bytes) -> str:
    """Return the mime type of an image payload, or application/octet-stream."""
    try:
        # Image.open only parses the header; pixel data is not decoded here
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return UNKNOWN_CONTENT_TYPE
    if fmt in JPEG_FORMATS:
        return "image/jpeg"
    return Image.MIME.get(fmt or "", UNKNOWN_CONTENT_TYPE)
