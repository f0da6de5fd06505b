"""
Destination key derivation and public URL shaping. Pure functions.
"""
from __future__ import annotations

import uuid

from shared.imaging.constants import ResizeMode


def finalize_key(file_id: str, file_extension: str, directory: str = "") -> str:
    """<directory>/<file_id>.<ext>, or <file_id>.<ext> without a directory."""
    if directory:
        return f"{directory}/{file_id}.{file_extension}"
    return f"{file_id}.{file_extension}"


def variant_key(mode: ResizeMode, size: str, image_key: str) -> str:
    """crop/<size>/<key> or ratio/<size>/<key>; mirrors the request path."""
    return f"{mode.value}/{size}/{image_key}"


def generate_upload_key(extension: str, directory: str = "") -> str:
    """Fresh upload key with a random file id."""
    return finalize_key(str(uuid.uuid4()), extension, directory)


def website_url(bucket: str, region: str, key: str) -> str:
    """Public S3 static-website location of an object."""
    return f"http://{bucket}.s3-website-{region}.amazonaws.com/{key}"
