import io
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from shared.exceptions import NotFoundError, ServerError
from shared.utils.s3 import BlobStore


def _client_error(code: str, operation: str = "GetObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def test_download_returns_byte_count(s3_client, store) -> None:
    s3_client.add("bucket", "a.png", b"12345")
    buffer = io.BytesIO()
    assert store.download("bucket", "a.png", buffer) == 5
    assert buffer.getvalue() == b"12345"


@pytest.mark.parametrize("code", ["404", "NoSuchKey", "NotFound"])
def test_missing_object_is_not_found(code: str) -> None:
    client = MagicMock()
    client.download_fileobj.side_effect = _client_error(code)
    with pytest.raises(NotFoundError):
        BlobStore(client).download("bucket", "missing.png", io.BytesIO())


def test_other_download_failures_are_server_errors() -> None:
    client = MagicMock()
    client.download_fileobj.side_effect = _client_error("AccessDenied")
    with pytest.raises(ServerError):
        BlobStore(client).download("bucket", "a.png", io.BytesIO())

    client.download_fileobj.side_effect = EndpointConnectionError(endpoint_url="https://s3")
    with pytest.raises(ServerError):
        BlobStore(client).download("bucket", "a.png", io.BytesIO())


def test_put_is_public_read_attachment(s3_client, store) -> None:
    store.put("bucket", "a.png", b"data", "image/png")
    assert s3_client.puts == [
        {
            "Bucket": "bucket",
            "Key": "a.png",
            "Body": b"data",
            "ACL": "public-read",
            "ContentLength": 4,
            "ContentType": "image/png",
            "ContentDisposition": "attachment",
        }
    ]


def test_put_failure_is_server_error() -> None:
    client = MagicMock()
    client.put_object.side_effect = _client_error("InternalError", "PutObject")
    with pytest.raises(ServerError):
        BlobStore(client).put("bucket", "a.png", b"data", "image/png")


def test_delete(s3_client, store) -> None:
    s3_client.add("bucket", "a.png", b"data")
    store.delete("bucket", "a.png")
    assert s3_client.deletes == [("bucket", "a.png")]
    assert ("bucket", "a.png") not in s3_client.objects


def test_presigned_put_url_locks_content_type() -> None:
    client = MagicMock()
    client.generate_presigned_url.return_value = "https://signed"
    url = BlobStore(client).presigned_put_url("bucket", "a.png", "image/png", expires_in=900)
    assert url == "https://signed"
    client.generate_presigned_url.assert_called_once_with(
        "put_object",
        Params={"Bucket": "bucket", "Key": "a.png", "ContentType": "image/png"},
        ExpiresIn=900,
    )
