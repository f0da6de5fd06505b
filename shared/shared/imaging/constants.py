"""
Image pipeline — static constants and enum types.
"""
import enum
import re


class ResizeMode(str, enum.Enum):
    """Resize strategy; the value doubles as the variant key prefix."""
    EXACT_CROP = "crop"   # scale then centre-crop to exactly width x height
    FIT_WITHIN = "ratio"  # scale to fit inside width x height, keep aspect ratio


class PipelineState(str, enum.Enum):
    START = "START"
    VALIDATING = "VALIDATING"
    DOWNLOADING = "DOWNLOADING"
    TRANSFORMING = "TRANSFORMING"
    UPLOADING = "UPLOADING"
    DONE = "DONE"
    FAILED = "FAILED"


# Mime types accepted for processing (detected from content, never from the name)
VALID_IMAGE_FORMATS = frozenset({"image/png", "image/jpeg"})

# Fallback when the content is not a recognisable image
UNKNOWN_CONTENT_TYPE = "application/octet-stream"

# Upload extension -> mime subtype used to lock the presigned PUT
EXTENSION_MAP: dict[str, str] = {
    "png": "png",
    "jpg": "jpeg",
    "jpeg": "jpeg",
}

# "<width>x<height>", decimal, no whitespace
SIZE_TOKEN_PATTERN = re.compile(r"^\d+x\d+$")

# Re-encode quality for JPEG output
JPEG_QUALITY = 95

# Pillow format names whose bytes are plain JPEG; MPO is multi-frame JPEG from cameras
JPEG_FORMATS = frozenset({"JPEG", "MPO"})
