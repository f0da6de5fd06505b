"""
Serve flow — HTTP routes for on-demand variants.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from image_service.config import Settings
from image_service.dependencies import get_blob_store, get_request_logger, get_settings
from image_service.serve import controller
from shared.imaging.constants import ResizeMode
from shared.utils.logger import RequestLogger
from shared.utils.s3 import BlobStore

router = APIRouter(tags=["serve"])


@router.get(
    "/crop/{size}/{image_key:path}",
    status_code=status.HTTP_301_MOVED_PERMANENTLY,
    summary="Exact-size variant, centre cropped",
)
def get_resize_crop(
    size: str,
    image_key: str,
    settings: Settings = Depends(get_settings),
    store: BlobStore = Depends(get_blob_store),
    log: RequestLogger = Depends(get_request_logger),
) -> RedirectResponse:
    url = controller.resize_variant(
        settings, store, log, mode=ResizeMode.EXACT_CROP, size=size, image_key=image_key
    )
    return RedirectResponse(url, status_code=status.HTTP_301_MOVED_PERMANENTLY)


@router.get(
    "/ratio/{size}/{image_key:path}",
    status_code=status.HTTP_301_MOVED_PERMANENTLY,
    summary="Variant scaled to fit, aspect ratio preserved",
)
def get_resize_ratio(
    size: str,
    image_key: str,
    settings: Settings = Depends(get_settings),
    store: BlobStore = Depends(get_blob_store),
    log: RequestLogger = Depends(get_request_logger),
) -> RedirectResponse:
    url = controller.resize_variant(
        settings, store, log, mode=ResizeMode.FIT_WITHIN, size=size, image_key=image_key
    )
    return RedirectResponse(url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
