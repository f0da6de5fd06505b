"""
Image pipeline — Pydantic V2 value objects passed between pipeline stages.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from shared.imaging.constants import ResizeMode


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SourceRef(_Frozen):
    """Object to fetch."""
    bucket: str
    key: str


class DestinationRef(_Frozen):
    """Where the transformed object is stored."""
    bucket: str
    key: str


class TargetGeometry(_Frozen):
    """Requested output box. 0 defers to the configured maximum."""
    width: int = 0
    height: int = 0
    mode: ResizeMode = ResizeMode.FIT_WITHIN


class Constraint(_Frozen):
    """Process-wide limits every request is clamped against."""
    max_width: int = Field(gt=0)
    max_height: int = Field(gt=0)
    max_bytes: int = Field(gt=0)


class CompletionEvent(_Frozen):
    """Result of a successful run."""
    bucket: str
    key: str
    width: int
    height: int
    size_bytes: int
