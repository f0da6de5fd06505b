"""
Serve flow — on-demand crop/ratio variants.

A request for /<mode>/<size>/<key> renders the variant into the destination
bucket under exactly that path and redirects to it, so later requests are
answered by S3 directly.
"""
from __future__ import annotations

from image_service.config import Settings
from shared.imaging import geometry, keys, validation
from shared.imaging.constants import ResizeMode
from shared.imaging.pipeline import TransformPipeline
from shared.imaging.schemas import DestinationRef, SourceRef, TargetGeometry
from shared.utils.logger import RequestLogger
from shared.utils.s3 import BlobStore


def resize_variant(
    settings: Settings,
    store: BlobStore,
    log: RequestLogger,
    *,
    mode: ResizeMode,
    size: str,
    image_key: str,
) -> str:
    """Create the variant and return its public URL."""
    log.info("Resize requested: mode=%s size=%s image_key=%s", mode.value, size, image_key)
    validation.require_fields(size=size, image_key=image_key)
    width, height = geometry.parse_size_token(size)

    resized_key = keys.variant_key(mode, size, image_key)
    pipeline = TransformPipeline(store, settings.constraint, log.bind(file_key=resized_key))
    pipeline.run(
        SourceRef(bucket=settings.aws_s3_bucket_source, key=image_key),
        DestinationRef(bucket=settings.aws_s3_bucket_destination, key=resized_key),
        TargetGeometry(width=width, height=height, mode=mode),
    )
    return keys.website_url(settings.aws_s3_bucket_destination, settings.region, resized_key)
