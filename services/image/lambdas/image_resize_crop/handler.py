"""
AWS Lambda handler — On-demand image variants

Triggered by API Gateway (typically as the S3 website 404 redirect target):
  GET /crop/{size}/{image_key+}   exact size, centre cropped
  GET /ratio/{size}/{image_key+}  scaled to fit, aspect ratio preserved

Flow:
  1. Validates size ("<width>x<height>") before touching S3.
  2. Downloads image_key from the source bucket; 404 if it does not exist.
  3. Rejects files over MAX_BYTES and anything that is not PNG or JPEG.
  4. Renders the variant, clamped to MAX_WIDTH x MAX_HEIGHT.
  5. Stores it at <mode>/<size>/<image_key> in the destination bucket.
  6. Redirects (301) to the variant's S3 website URL.

Environment variables:
  AWS_S3_BUCKET_SOURCE       — originals
  AWS_S3_BUCKET_DESTINATION  — rendered variants (S3 static website)
  MAX_BYTES, MAX_WIDTH, MAX_HEIGHT
  REGION                     — AWS region, used in the website URL
"""
from __future__ import annotations

import logging

from image_service.config import load_settings
from image_service.serve import controller
from shared.exceptions import UserError
from shared.imaging.constants import ResizeMode
from shared.utils.logger import lambda_logger
from shared.utils.responses import redirect_response, render_error
from shared.utils.s3 import BlobStore

logging.getLogger().setLevel(logging.INFO)


def handler(event: dict, context: object) -> dict:
    """Lambda entry point — renders a crop/ratio variant and redirects to it."""
    log = lambda_logger(__name__, context)
    params = event.get("pathParameters") or {}
    try:
        mode = _resize_mode(event)
        settings = load_settings()
        url = controller.resize_variant(
            settings,
            BlobStore(region=settings.region),
            log,
            mode=mode,
            size=params.get("size") or "",
            image_key=params.get("image_key") or "",
        )
    except Exception as exc:
        return render_error(exc, log)
    return redirect_response(url)


def _resize_mode(event: dict) -> ResizeMode:
    """Pick the mode from the route: /crop/... or /ratio/..."""
    route = event.get("resource") or event.get("path") or ""
    first_segment = route.lstrip("/").split("/", 1)[0]
    try:
        return ResizeMode(first_segment)
    except ValueError:
        raise UserError(f"Unsupported resize mode: {first_segment}") from None
