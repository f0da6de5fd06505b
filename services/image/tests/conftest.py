"""
Shared fixtures: in-memory S3 double, Pillow-generated images, Lambda
context and per-test environment.
"""
import io
import uuid
from collections.abc import Callable, Generator

import pytest
from botocore.exceptions import ClientError
from PIL import Image

from image_service.config import Settings
from shared.utils.logger import request_logger
from shared.utils.s3 import BlobStore

UPLOAD_BUCKET = "images.upload.test"
PUBLIC_BUCKET = "images.static.test"
SOURCE_BUCKET = "images.source.test"
DESTINATION_BUCKET = "images.variants.test"


class FakeS3Client:
    """Just enough of the boto3 S3 client for BlobStore."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.downloads: list[tuple[str, str]] = []
        self.puts: list[dict] = []
        self.deletes: list[tuple[str, str]] = []

    def add(self, bucket: str, key: str, body: bytes) -> None:
        self.objects[(bucket, key)] = body

    def download_fileobj(self, bucket: str, key: str, fileobj) -> None:
        self.downloads.append((bucket, key))
        if (bucket, key) not in self.objects:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")
        fileobj.write(self.objects[(bucket, key)])

    def put_object(self, **kwargs) -> dict:
        self.puts.append(kwargs)
        self.objects[(kwargs["Bucket"], kwargs["Key"])] = kwargs["Body"]
        return {"ETag": '"etag"'}

    def delete_object(self, Bucket: str, Key: str) -> dict:
        self.deletes.append((Bucket, Key))
        self.objects.pop((Bucket, Key), None)
        return {}

    def generate_presigned_url(self, operation: str, Params: dict, ExpiresIn: int) -> str:
        return (
            f"https://{Params['Bucket']}.s3.amazonaws.com/{Params['Key']}"
            f"?op={operation}&content-type={Params['ContentType']}&expires={ExpiresIn}"
        )


class MockContext:
    def __init__(self, function_name: str = "test-function") -> None:
        self.function_name = function_name
        self.aws_request_id = str(uuid.uuid4())
        self.memory_limit_in_mb = 128
        self.invoked_function_arn = f"arn:aws:lambda:us-east-1:123456789:function:{function_name}"


def make_image(fmt: str, size: tuple[int, int] = (400, 200), color=(200, 30, 30)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


def make_mpo(size: tuple[int, int] = (400, 200)) -> bytes:
    """Two-frame MPO, the multi-picture JPEG written by many cameras and phones."""
    frames = [Image.new("RGB", size, (200, 30, 30)), Image.new("RGB", size, (30, 30, 200))]
    buf = io.BytesIO()
    frames[0].save(buf, format="MPO", save_all=True, append_images=frames[1:])
    return buf.getvalue()


def image_size(data: bytes) -> tuple[int, int]:
    with Image.open(io.BytesIO(data)) as img:
        return img.size


@pytest.fixture
def png() -> Callable[..., bytes]:
    return lambda size=(400, 200): make_image("PNG", size)


@pytest.fixture
def jpeg() -> Callable[..., bytes]:
    return lambda size=(400, 200): make_image("JPEG", size)


@pytest.fixture
def gif() -> Callable[..., bytes]:
    return lambda size=(400, 200): make_image("GIF", size)


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def store(s3_client: FakeS3Client) -> BlobStore:
    return BlobStore(s3_client)


@pytest.fixture
def log():
    return request_logger("tests", "test-request")


@pytest.fixture
def context() -> MockContext:
    return MockContext()


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> Generator[pytest.MonkeyPatch, None, None]:
    """Deployment-like environment for the Lambda handlers."""
    values = {
        "REGION": "us-east-1",
        "AWS_S3_BUCKET_UPLOAD": UPLOAD_BUCKET,
        "AWS_S3_BUCKET_PUBLIC": PUBLIC_BUCKET,
        "AWS_S3_BUCKET_SOURCE": SOURCE_BUCKET,
        "AWS_S3_BUCKET_DESTINATION": DESTINATION_BUCKET,
        "CALLBACK_QUEUE": "image-callbacks",
        "MAX_BYTES": "6291456",
        "MAX_WIDTH": "2000",
        "MAX_HEIGHT": "2000",
        "ENVIRONMENT": "development",
        "API_SECRET_KEY": "",
        "API_USERNAME": "",
        "API_PASSWORD": "",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    yield monkeypatch


@pytest.fixture
def settings(env: pytest.MonkeyPatch) -> Settings:
    return Settings()
