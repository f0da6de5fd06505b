"""
AWS Lambda handler — Delete Image

Triggered by API Gateway: DELETE /image/delete/{image_key+}

Removes the object from the public bucket and answers 204.

Environment variables:
  AWS_S3_BUCKET_PUBLIC   — bucket serving finalized images
  REGION                 — AWS region
"""
from __future__ import annotations

import logging

from image_service.config import load_settings
from image_service.upload import controller
from shared.utils.logger import lambda_logger
from shared.utils.responses import json_response, render_error
from shared.utils.s3 import BlobStore

logging.getLogger().setLevel(logging.INFO)


def handler(event: dict, context: object) -> dict:
    """Lambda entry point — deletes a public image."""
    log = lambda_logger(__name__, context)
    image_key = (event.get("pathParameters") or {}).get("image_key") or ""
    try:
        settings = load_settings()
        controller.delete_image(settings, BlobStore(region=settings.region), log, image_key)
    except Exception as exc:
        return render_error(exc, log)
    return json_response(204)
