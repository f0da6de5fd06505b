"""
AWS Lambda handler — Upload Image Callback

Triggered by SQS messages from the upload-image worker:
  {"callback_url", "bucket", "directory", "file_id", "file_extension",
   "width", "height", "size_bytes"}

POSTs {bucket, directory, file_id, file_extension, width, height,
size_bytes} to callback_url. Delivery is attempted once; a failure is logged
and the message is skipped.

Environment variables:
  ENVIRONMENT     — "TEST" skips the HTTP call
  API_SECRET_KEY  — sent as "Authorization: Apikey <key>" when set
  API_USERNAME, API_PASSWORD — HTTP basic auth when both are set
"""
from __future__ import annotations

import logging

from image_service.callback import controller
from image_service.config import load_settings
from shared.events.schemas import CallbackMessage
from shared.exceptions import ImageServiceError
from shared.utils.logger import lambda_logger

logging.getLogger().setLevel(logging.INFO)


def handler(event: dict, context: object) -> dict:
    """Lambda entry point — delivers each callback message."""
    log = lambda_logger(__name__, context)
    settings = load_settings()

    results = []
    for record in event.get("Records", []):
        message_id = record.get("messageId", "")
        message_log = log.bind(message_id=message_id)
        try:
            message = CallbackMessage.model_validate_json(record.get("body") or "{}")
            status = controller.send_callback(settings, message_log, message)
        except ImageServiceError as exc:
            message_log.error("Callback skipped: %s", exc.message)
            results.append({"status": "error", "message_id": message_id})
            continue
        except Exception as exc:
            message_log.exception("Callback skipped: %s", exc)
            results.append({"status": "error", "message_id": message_id})
            continue
        results.append({"status": "sent" if status else "skipped", "message_id": message_id, "http_status": status})

    return {"statusCode": 200, "results": results}
