"""
AWS Lambda handler — Upload URL

Triggered by API Gateway: GET /image/upload-url?directory=<dir>&extension=<ext>

Returns a presigned PUT URL into the upload bucket and the key it will be
stored under: {"upload_url": ..., "file_key": "<dir>/<uuid>.<ext>"}.

Environment variables:
  AWS_S3_BUCKET_UPLOAD       — private bucket receiving direct uploads
  UPLOAD_URL_EXPIRY_SECONDS  — presigned URL lifetime (default 900)
  REGION                     — AWS region
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
    """Lambda entry point — issues a presigned upload URL."""
    log = lambda_logger(__name__, context)
    params = event.get("queryStringParameters") or {}
    try:
        settings = load_settings()
        result = controller.get_upload_url(
            settings,
            BlobStore(region=settings.region),
            log,
            directory=params.get("directory") or "",
            extension=params.get("extension") or "",
        )
    except Exception as exc:
        return render_error(exc, log)
    return json_response(200, result.model_dump())
