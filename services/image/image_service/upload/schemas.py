"""
Upload flow — Pydantic V2 request/response schemas.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Base(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        extra="ignore",
    )


# ── Requests ─────────────────────────────────────────────────────────────────

class ProcessUploadRequest(_Base):
    """Finalize an image previously PUT to the upload bucket."""
    directory: str = Field(default="", description="Optional key prefix, no trailing slash")
    file_extension: str = Field(default="", description="Extension used when the upload key was issued")
    file_id: str = Field(default="", description="File id part of the upload key")
    width: int = Field(default=0, ge=0, description="Max output width; 0 uses the configured maximum")
    height: int = Field(default=0, ge=0, description="Max output height; 0 uses the configured maximum")


# ── Responses ────────────────────────────────────────────────────────────────

class UploadUrlResponse(_Base):
    upload_url: str
    file_key: str


class ProcessUploadResponse(_Base):
    bucket: str
    directory: str
    file_extension: str
    file_id: str
    width: int
    height: int
    size_bytes: int
