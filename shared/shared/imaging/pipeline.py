"""
Transform pipeline — download, validate, resize, upload.

One instance per run; every trigger (HTTP request, queue message) builds a
fresh pipeline, so nothing is shared between runs:

  START -> VALIDATING -> DOWNLOADING -> TRANSFORMING -> UPLOADING -> DONE

  Any state before DONE may move to FAILED.

The source object is staged in a temporary file owned by the run and
closed on every exit path. No step is retried; the first error aborts the
run and is re-raised as one of UserError / NotFoundError / ServerError.
"""
from __future__ import annotations

import tempfile

from shared.exceptions import ImageServiceError, ServerError
from shared.imaging import geometry, validation
from shared.imaging.constants import PipelineState, ResizeMode
from shared.imaging.processor import ImageProcessor
from shared.imaging.schemas import (
    CompletionEvent,
    Constraint,
    DestinationRef,
    SourceRef,
    TargetGeometry,
)
from shared.imaging.sniffer import detect_content_type
from shared.utils.logger import RequestLogger
from shared.utils.s3 import BlobStore


class TransformPipeline:
    """Bounded image transform-and-relocate run."""

    def __init__(
        self,
        store: BlobStore,
        constraint: Constraint,
        log: RequestLogger,
    ) -> None:
        self._store = store
        self._constraint = constraint
        self._log = log
        self.state = PipelineState.START
        self.failure: ImageServiceError | None = None

    def run(
        self,
        source: SourceRef,
        destination: DestinationRef,
        target: TargetGeometry,
    ) -> CompletionEvent:
        if self.state is not PipelineState.START:
            raise RuntimeError(f"Pipeline already ran (state={self.state.value})")
        try:
            return self._run(source, destination, target)
        except ImageServiceError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            error = ServerError(f"Unexpected pipeline error: {exc}")
            self._fail(error)
            raise error from exc

    def _run(
        self,
        source: SourceRef,
        destination: DestinationRef,
        target: TargetGeometry,
    ) -> CompletionEvent:
        c = self._constraint

        self._enter(PipelineState.VALIDATING)
        bound_width = geometry.bound(target.width, c.max_width, name="width")
        bound_height = geometry.bound(target.height, c.max_height, name="height")

        with tempfile.TemporaryFile(prefix="image-") as buffer:
            self._enter(PipelineState.DOWNLOADING)
            num_bytes = self._store.download(source.bucket, source.key, buffer)
            self._log.info(
                "Downloaded s3://%s/%s (%d bytes)", source.bucket, source.key, num_bytes
            )

            validation.check_byte_size(num_bytes, c.max_bytes, source.key)
            buffer.seek(0)
            data = buffer.read()
            content_type = detect_content_type(data)
            validation.check_content_type(content_type, source.key)

            self._enter(PipelineState.TRANSFORMING)
            body, width, height = self._transform(
                data, target.mode, bound_width, bound_height
            )

        self._enter(PipelineState.UPLOADING)
        self._store.put(destination.bucket, destination.key, body, content_type)

        self._enter(PipelineState.DONE)
        self._log.info(
            "Image stored: bucket=%s file_key=%s width=%d height=%d size_bytes=%d",
            destination.bucket,
            destination.key,
            width,
            height,
            len(body),
        )
        return CompletionEvent(
            bucket=destination.bucket,
            key=destination.key,
            width=width,
            height=height,
            size_bytes=len(body),
        )

    def _transform(
        self,
        data: bytes,
        mode: ResizeMode,
        bound_width: int,
        bound_height: int,
    ) -> tuple[bytes, int, int]:
        """Return (body, width, height) for the resized image."""
        processor = ImageProcessor(data)
        try:
            if mode is ResizeMode.EXACT_CROP:
                processor.fill(bound_width, bound_height)
                return processor.encode(), bound_width, bound_height

            resized = geometry.resolve_fit(
                processor.width, processor.height, bound_width, bound_height
            )
            if resized is None:
                # Already fits: original bytes go through untouched
                self._log.info(
                    "No resize needed: %dx%d fits %dx%d",
                    processor.width,
                    processor.height,
                    bound_width,
                    bound_height,
                )
                return data, processor.width, processor.height
            processor.fit(*resized)
            return processor.encode(), resized[0], resized[1]
        finally:
            processor.close()

    def _enter(self, state: PipelineState) -> None:
        self._log.debug("Pipeline %s -> %s", self.state.value, state.value)
        self.state = state

    def _fail(self, exc: ImageServiceError) -> None:
        self.failure = exc
        self._log.error(
            "Pipeline failed in %s: %s: %s",
            self.state.value,
            type(exc).__name__,
            exc.message,
        )
        self.state = PipelineState.FAILED
