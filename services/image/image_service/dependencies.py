"""FastAPI dependencies: per-request settings, blob store and logger."""
from fastapi import Depends, Request

from image_service.config import Settings, load_settings
from shared.utils.logger import RequestLogger, request_logger
from shared.utils.s3 import BlobStore


def get_settings() -> Settings:
    return load_settings()


def get_blob_store(settings: Settings = Depends(get_settings)) -> BlobStore:
    return BlobStore(region=settings.region)


def get_request_logger(request: Request) -> RequestLogger:
    log = getattr(request.state, "log", None)
    if log is None:
        log = request_logger("image_service.http", getattr(request.state, "request_id", None))
    return log
