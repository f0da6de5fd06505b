"""
Upload flow — HTTP routes.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from image_service.config import Settings
from image_service.dependencies import get_blob_store, get_request_logger, get_settings
from image_service.upload import controller
from image_service.upload.schemas import (
    ProcessUploadRequest,
    ProcessUploadResponse,
    UploadUrlResponse,
)
from shared.utils.logger import RequestLogger
from shared.utils.s3 import BlobStore

router = APIRouter(prefix="/image", tags=["upload"])


@router.get(
    "/upload-url",
    response_model=UploadUrlResponse,
    summary="Request a presigned upload URL",
    description=(
        "Generates a presigned S3 PUT URL in the upload bucket. After uploading, "
        "call POST /image/process-upload with the file id and extension."
    ),
)
def get_upload_url(
    directory: str = Query(default=""),
    extension: str = Query(default=""),
    settings: Settings = Depends(get_settings),
    store: BlobStore = Depends(get_blob_store),
    log: RequestLogger = Depends(get_request_logger),
) -> UploadUrlResponse:
    return controller.get_upload_url(settings, store, log, directory=directory, extension=extension)


@router.post(
    "/process-upload",
    response_model=ProcessUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Finalize an uploaded image",
    description=(
        "Validates the uploaded image (PNG or JPEG, size limit), shrinks it to fit "
        "the requested box and copies it to the public bucket."
    ),
)
def process_upload(
    request: ProcessUploadRequest,
    settings: Settings = Depends(get_settings),
    store: BlobStore = Depends(get_blob_store),
    log: RequestLogger = Depends(get_request_logger),
) -> ProcessUploadResponse:
    return controller.process_upload(settings, store, log, request)


@router.delete(
    "/delete/{image_key:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a public image",
)
def delete_image(
    image_key: str,
    settings: Settings = Depends(get_settings),
    store: BlobStore = Depends(get_blob_store),
    log: RequestLogger = Depends(get_request_logger),
) -> Response:
    controller.delete_image(settings, store, log, image_key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
