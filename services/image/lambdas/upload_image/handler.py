"""
AWS Lambda handler — Upload Image (queue worker)

Triggered by SQS. Each message body is JSON:
  {"file_id", "file_extension", "directory", "callback_url", "width", "height"}

Flow, per message and strictly one message at a time:
  1. Downloads <directory>/<file_id>.<file_extension> from the upload bucket.
  2. Rejects files over MAX_BYTES and anything that is not PNG or JPEG.
  3. Shrinks the image to fit the requested box, clamped to MAX_WIDTH x MAX_HEIGHT.
  4. Stores it under the same key in the public bucket.
  5. Sends a callback message to CALLBACK_QUEUE for the callback worker.

A failing message is logged and skipped; the rest of the batch carries on.

Environment variables:
  AWS_S3_BUCKET_UPLOAD, AWS_S3_BUCKET_PUBLIC
  CALLBACK_QUEUE         — queue name for callback messages
  MAX_BYTES, MAX_WIDTH, MAX_HEIGHT
  REGION                 — AWS region
"""
from __future__ import annotations

import logging

from image_service.config import Settings, load_settings
from image_service.upload import controller
from shared.events.publishers import QueuePublisher
from shared.events.schemas import ImageMessage
from shared.exceptions import ImageServiceError
from shared.utils.logger import RequestLogger, lambda_logger
from shared.utils.s3 import BlobStore

logging.getLogger().setLevel(logging.INFO)


def handler(event: dict, context: object) -> dict:
    """Lambda entry point — finalizes each queued upload."""
    log = lambda_logger(__name__, context)
    # A broken configuration fails the whole invocation so SQS redelivers it
    settings = load_settings()
    store = BlobStore(region=settings.region)
    publisher = QueuePublisher(region=settings.region)

    results = []
    for record in event.get("Records", []):
        message_log = log.bind(message_id=record.get("messageId", ""))
        message_log.info("Message received: event_source=%s", record.get("eventSource", ""))
        results.append(_process_message(record, settings, store, publisher, message_log))

    return {"statusCode": 200, "results": results}


def _process_message(
    record: dict,
    settings: Settings,
    store: BlobStore,
    publisher: QueuePublisher,
    log: RequestLogger,
) -> dict:
    """Finalize a single message; never raises."""
    message_id = record.get("messageId", "")
    try:
        message = ImageMessage.model_validate_json(record.get("body") or "{}")
        event = controller.finalize_queued(settings, store, publisher, log, message)
    except ImageServiceError as exc:
        log.error("Message skipped: %s: %s", type(exc).__name__, exc.message)
        return {"status": "error", "message_id": message_id, "message": exc.public_message}
    except Exception as exc:
        log.exception("Message skipped: %s", exc)
        return {"status": "error", "message_id": message_id, "message": str(exc)}
    return {"status": "completed", "message_id": message_id, "key": event.key}
