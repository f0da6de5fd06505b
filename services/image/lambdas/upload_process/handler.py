"""
AWS Lambda handler — Process Upload

Triggered by API Gateway: POST /image/process-upload

Flow:
  1. Reads {file_id, file_extension, directory, width, height} from the body.
  2. Downloads <directory>/<file_id>.<file_extension> from the upload bucket.
  3. Rejects files over MAX_BYTES and anything that is not PNG or JPEG.
  4. Shrinks the image to fit min(width, MAX_WIDTH) x min(height, MAX_HEIGHT).
  5. Stores it under the same key in the public bucket (public-read).
  6. Responds 201 with bucket, key parts, final width/height and size.

Environment variables:
  AWS_S3_BUCKET_UPLOAD   — bucket the client uploaded to
  AWS_S3_BUCKET_PUBLIC   — bucket serving finalized images
  MAX_BYTES, MAX_WIDTH, MAX_HEIGHT
  REGION                 — AWS region
"""
from __future__ import annotations

import base64
import logging

from image_service.config import load_settings
from image_service.upload import controller
from shared.utils.logger import lambda_logger
from shared.utils.responses import json_response, render_error
from shared.utils.s3 import BlobStore

logging.getLogger().setLevel(logging.INFO)


def handler(event: dict, context: object) -> dict:
    """Lambda entry point — finalizes an uploaded image synchronously."""
    log = lambda_logger(__name__, context)
    try:
        settings = load_settings()
        request = controller.parse_process_upload_request(_body(event))
        result = controller.process_upload(
            settings, BlobStore(region=settings.region), log, request
        )
    except Exception as exc:
        return render_error(exc, log)
    return json_response(201, result.model_dump())


def _body(event: dict) -> str | bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body
