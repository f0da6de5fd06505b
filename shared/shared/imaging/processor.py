"""
Image codec — decode, resize, re-encode with Pillow.

Two resize strategies:
  - fill: uniform scale then centre crop to exactly width x height
  - fit:  uniform scale to the given (already aspect-correct) dimensions

Output is re-encoded in the source format so the stored object keeps the
content type that was validated on the way in.
"""
from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from shared.exceptions import ServerError
from shared.imaging.constants import JPEG_FORMATS, JPEG_QUALITY

logger = logging.getLogger(__name__)


class ImageProcessor:
    """Decoded image held for the duration of a single pipeline run."""

    def __init__(self, image_data: bytes) -> None:
        try:
            self._image = Image.open(io.BytesIO(image_data))
            self._image.load()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
            raise ServerError(f"Failed to open image: {exc}") from exc
        fmt = self._image.format
        # MPO frames are written back as a single-frame JPEG
        self._format = "JPEG" if fmt in JPEG_FORMATS else fmt

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def format(self) -> str | None:
        return self._format

    def fill(self, width: int, height: int) -> None:
        """Crop from center to the target aspect ratio, then resize."""
        img = self._image
        img_ratio = img.width / img.height
        target_ratio = width / height

        if img_ratio > target_ratio:
            # Wider than target: crop horizontally
            new_width = max(1, int(img.height * target_ratio))
            left = (img.width - new_width) // 2
            img = img.crop((left, 0, left + new_width, img.height))
        else:
            # Taller than target: crop vertically
            new_height = max(1, int(img.width / target_ratio))
            top = (img.height - new_height) // 2
            img = img.crop((0, top, img.width, top + new_height))

        self._image = img.resize((width, height), Image.LANCZOS)

    def fit(self, width: int, height: int) -> None:
        """Resize to exactly width x height; caller keeps the aspect ratio."""
        self._image = self._image.resize((width, height), Image.LANCZOS)

    def encode(self) -> bytes:
        """Serialize in the source format."""
        fmt = self._format or "PNG"
        options: dict[str, object] = {}
        img = self._image
        if fmt == "JPEG":
            options["quality"] = JPEG_QUALITY
            if img.mode not in ("RGB", "L", "CMYK"):
                img = img.convert("RGB")
        buf = io.BytesIO()
        try:
            img.save(buf, format=fmt, **options)
        except (OSError, ValueError, KeyError) as exc:
            raise ServerError(f"Failed to encode image as {fmt}: {exc}") from exc
        logger.debug("Encoded %s image %dx%d (%d bytes)", fmt, img.width, img.height, buf.tell())
        return buf.getvalue()

    def close(self) -> None:
        self._image.close()
