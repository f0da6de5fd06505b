"""
AWS S3 blob store — the only place the pipeline touches S3.

Upload flow:
  1. Client requests a presigned PUT URL (upload-url function).
  2. Client uploads the file directly to the upload bucket.
  3. A finalize run (sync endpoint or queue worker) downloads it, validates,
     resizes and puts it into the public bucket.

Objects written by the pipeline are public-read and served as attachments.
"""
from __future__ import annotations

import io
from typing import IO

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from shared.exceptions import NotFoundError, ServerError

# Error codes S3 uses for a missing key (GetObject vs HeadObject)
_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


class BlobStore:
    """Thin wrapper around a boto3 S3 client."""

    def __init__(self, client=None, *, region: str | None = None) -> None:
        self._client = client or boto3.client("s3", region_name=region or None)

    def download(self, bucket: str, key: str, fileobj: IO[bytes]) -> int:
        """Download s3://bucket/key into fileobj. Returns the byte count."""
        try:
            self._client.download_fileobj(bucket, key, fileobj)
        except ClientError as exc:
            if _error_code(exc) in _NOT_FOUND_CODES:
                raise NotFoundError(f"No such key: s3://{bucket}/{key}") from exc
            raise ServerError(f"S3 download failed for s3://{bucket}/{key}: {exc}") from exc
        except BotoCoreError as exc:
            raise ServerError(f"S3 download failed for s3://{bucket}/{key}: {exc}") from exc
        fileobj.seek(0, io.SEEK_END)
        return fileobj.tell()

    def put(self, bucket: str, key: str, body: bytes, content_type: str) -> None:
        """Store body as a public-read attachment."""
        try:
            self._client.put_object(
                Bucket=bucket,
                Key=key,
                Body=body,
                ACL="public-read",
                ContentLength=len(body),
                ContentType=content_type,
                ContentDisposition="attachment",
            )
        except (BotoCoreError, ClientError) as exc:
            raise ServerError(f"S3 upload failed for s3://{bucket}/{key}: {exc}") from exc

    def delete(self, bucket: str, key: str) -> None:
        try:
            self._client.delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise ServerError(f"S3 delete failed for s3://{bucket}/{key}: {exc}") from exc

    def presigned_put_url(
        self,
        bucket: str,
        key: str,
        content_type: str,
        *,
        expires_in: int = 900,
    ) -> str:
        """Return a presigned PUT URL locked to the given content type."""
        try:
            url: str = self._client.generate_presigned_url(
                "put_object",
                Params={"Bucket": bucket, "Key": key, "ContentType": content_type},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as exc:
            raise ServerError(f"Failed to sign upload URL for {key}: {exc}") from exc
        return url
