import re
import uuid

import pytest

from shared.exceptions import UserError
from shared.imaging import keys
from shared.imaging.constants import ResizeMode
from shared.imaging.validation import (
    check_byte_size,
    check_content_type,
    check_extension,
    require_fields,
)


def test_require_fields_names_every_missing_field() -> None:
    with pytest.raises(UserError) as exc_info:
        require_fields(file_id="", file_extension=None, directory="x")
    message = exc_info.value.message
    assert "missing: file_id, file_extension" in message
    assert exc_info.value.status_code == 400


def test_require_fields_passes_when_all_present() -> None:
    require_fields(file_id="abc", file_extension="png")


def test_byte_size_limit_is_strictly_greater() -> None:
    check_byte_size(100, 100, "a.png")
    with pytest.raises(UserError, match=r"File is too large: 101, a.png"):
        check_byte_size(101, 100, "a.png")


@pytest.mark.parametrize("content_type", ["image/png", "image/jpeg"])
def test_allowed_content_types(content_type: str) -> None:
    check_content_type(content_type, "k")


@pytest.mark.parametrize("content_type", ["image/gif", "image/webp", "application/octet-stream"])
def test_rejected_content_types_surface_detected_type(content_type: str) -> None:
    with pytest.raises(UserError, match=f"Unsupported file type: {re.escape(content_type)}"):
        check_content_type(content_type, "k")


@pytest.mark.parametrize(("extension", "subtype"), [("png", "png"), ("jpg", "jpeg"), ("jpeg", "jpeg")])
def test_supported_extensions(extension: str, subtype: str) -> None:
    assert check_extension(extension) == subtype


@pytest.mark.parametrize("extension", ["gif", "", None, "exe"])
def test_unsupported_extension(extension) -> None:
    with pytest.raises(UserError, match="Unsupported extension"):
        check_extension(extension)


def test_finalize_key_with_directory() -> None:
    file_id = "90546589-4f3a-4e6b-8f5b-0c9b8a2f1d77"
    assert keys.finalize_key(file_id, "png", "test") == f"test/{file_id}.png"


def test_finalize_key_without_directory() -> None:
    file_id = "90546589-4f3a-4e6b-8f5b-0c9b8a2f1d77"
    assert keys.finalize_key(file_id, "png") == f"{file_id}.png"
    assert keys.finalize_key(file_id, "png", "") == f"{file_id}.png"


def test_variant_keys_prefix_original_key() -> None:
    assert keys.variant_key(ResizeMode.EXACT_CROP, "400x300", "a/b.jpg") == "crop/400x300/a/b.jpg"
    assert keys.variant_key(ResizeMode.FIT_WITHIN, "400x300", "a/b.jpg") == "ratio/400x300/a/b.jpg"


def test_generate_upload_key_uses_random_uuid() -> None:
    key = keys.generate_upload_key("jpg", "avatars")
    directory, name = key.split("/")
    assert directory == "avatars"
    file_id, extension = name.rsplit(".", 1)
    assert extension == "jpg"
    uuid.UUID(file_id)
    assert keys.generate_upload_key("jpg", "avatars") != key


def test_website_url() -> None:
    assert (
        keys.website_url("variants", "eu-west-1", "crop/10x10/a.png")
        == "http://variants.s3-website-eu-west-1.amazonaws.com/crop/10x10/a.png"
    )
