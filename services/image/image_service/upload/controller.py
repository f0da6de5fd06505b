"""
Upload flow — controller layer.

Shared by the Lambda handlers and the FastAPI routes: receives already
parsed input, runs validation and the transform pipeline, and returns the
response model. Raises ImageServiceError subclasses on failure.
"""
from __future__ import annotations

from pydantic import ValidationError

from image_service.config import Settings
from image_service.upload.schemas import (
    ProcessUploadRequest,
    ProcessUploadResponse,
    UploadUrlResponse,
)
from shared.events.publishers import QueuePublisher, build_callback_message
from shared.events.schemas import ImageMessage
from shared.exceptions import UserError
from shared.imaging import keys, validation
from shared.imaging.constants import ResizeMode
from shared.imaging.pipeline import TransformPipeline
from shared.imaging.schemas import (
    CompletionEvent,
    DestinationRef,
    SourceRef,
    TargetGeometry,
)
from shared.utils.logger import RequestLogger
from shared.utils.s3 import BlobStore


def parse_process_upload_request(body: str | bytes | None) -> ProcessUploadRequest:
    """Parse a raw JSON body; malformed or non-numeric input is a user error."""
    try:
        return ProcessUploadRequest.model_validate_json(body or "{}")
    except ValidationError as exc:
        raise UserError(f"Invalid request body: {exc.errors(include_url=False)}") from exc


def get_upload_url(
    settings: Settings,
    store: BlobStore,
    log: RequestLogger,
    *,
    directory: str = "",
    extension: str = "",
) -> UploadUrlResponse:
    """Issue a presigned PUT URL for a new upload key."""
    log.info("Upload URL requested: directory=%s extension=%s", directory, extension)
    subtype = validation.check_extension(extension)

    file_key = keys.generate_upload_key(extension, directory)
    upload_url = store.presigned_put_url(
        settings.aws_s3_bucket_upload,
        file_key,
        f"image/{subtype}",
        expires_in=settings.upload_url_expiry_seconds,
    )
    log.info("Upload URL issued: file_key=%s", file_key)
    return UploadUrlResponse(upload_url=upload_url, file_key=file_key)


def finalize(
    settings: Settings,
    store: BlobStore,
    log: RequestLogger,
    *,
    file_id: str,
    file_extension: str,
    directory: str = "",
    width: int = 0,
    height: int = 0,
) -> CompletionEvent:
    """Move an uploaded image into the public bucket, shrinking it to fit."""
    validation.require_fields(file_id=file_id, file_extension=file_extension)

    file_key = keys.finalize_key(file_id, file_extension, directory)
    pipeline = TransformPipeline(store, settings.constraint, log.bind(file_key=file_key))
    return pipeline.run(
        SourceRef(bucket=settings.aws_s3_bucket_upload, key=file_key),
        DestinationRef(bucket=settings.aws_s3_bucket_public, key=file_key),
        TargetGeometry(width=width, height=height, mode=ResizeMode.FIT_WITHIN),
    )


def process_upload(
    settings: Settings,
    store: BlobStore,
    log: RequestLogger,
    request: ProcessUploadRequest,
) -> ProcessUploadResponse:
    """Synchronous finalize; the result is the response body."""
    log.info(
        "Process upload: directory=%s file_id=%s file_extension=%s width=%d height=%d",
        request.directory,
        request.file_id,
        request.file_extension,
        request.width,
        request.height,
    )
    event = finalize(
        settings,
        store,
        log,
        file_id=request.file_id,
        file_extension=request.file_extension,
        directory=request.directory,
        width=request.width,
        height=request.height,
    )
    return ProcessUploadResponse(
        bucket=event.bucket,
        directory=request.directory,
        file_extension=request.file_extension,
        file_id=request.file_id,
        width=event.width,
        height=event.height,
        size_bytes=event.size_bytes,
    )


def finalize_queued(
    settings: Settings,
    store: BlobStore,
    publisher: QueuePublisher,
    log: RequestLogger,
    message: ImageMessage,
) -> CompletionEvent:
    """Asynchronous finalize; announces the result on the callback queue."""
    event = finalize(
        settings,
        store,
        log,
        file_id=message.file_id,
        file_extension=message.file_extension,
        directory=message.directory,
        width=message.width,
        height=message.height,
    )
    callback = build_callback_message(
        event,
        callback_url=message.callback_url,
        directory=message.directory,
        file_id=message.file_id,
        file_extension=message.file_extension,
    )
    message_id = publisher.publish(settings.callback_queue, callback)
    log.info("Callback message queued: queue=%s message_id=%s", settings.callback_queue, message_id)
    return event


def delete_image(
    settings: Settings,
    store: BlobStore,
    log: RequestLogger,
    image_key: str,
) -> None:
    """Remove an object from the public bucket."""
    validation.require_fields(image_key=image_key)
    store.delete(settings.aws_s3_bucket_public, image_key)
    log.info("Object deleted: bucket=%s key=%s", settings.aws_s3_bucket_public, image_key)
