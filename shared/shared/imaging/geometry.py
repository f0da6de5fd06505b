"""
Geometry resolution: turn a requested box plus configured maxima into the
final output dimensions.
"""
from __future__ import annotations

import math

from shared.exceptions import UserError
from shared.imaging.constants import SIZE_TOKEN_PATTERN


def bound(requested: int | None, maximum: int, *, name: str = "dimension") -> int:
    """Clamp a requested dimension; absent or 0 means "use the maximum"."""
    if requested is None or requested == 0:
        return maximum
    if isinstance(requested, bool) or not isinstance(requested, int):
        raise UserError(f"Invalid {name}: {requested!r}")
    if requested < 0:
        raise UserError(f"Invalid {name}: {requested}")
    return min(requested, maximum)


def resolve_exact(
    requested_width: int | None,
    requested_height: int | None,
    max_width: int,
    max_height: int,
) -> tuple[int, int]:
    """EXACT_CROP box: element-wise min against the maxima, no aspect ratio."""
    return (
        bound(requested_width, max_width, name="width"),
        bound(requested_height, max_height, name="height"),
    )


def resolve_fit(
    source_width: int,
    source_height: int,
    bound_width: int,
    bound_height: int,
) -> tuple[int, int] | None:
    """FIT_WITHIN dimensions, or None when the source already fits."""
    ratio = min(bound_width / source_width, bound_height / source_height)
    if ratio >= 1:
        return None
    # Extremely thin images must not collapse to a zero-pixel side
    width = max(1, math.floor(source_width * ratio))
    height = max(1, math.floor(source_height * ratio))
    return width, height


def parse_size_token(size: str) -> tuple[int, int]:
    """Parse "<width>x<height>"; anything else is a user error."""
    if not SIZE_TOKEN_PATTERN.fullmatch(size or ""):
        raise UserError(f"Bad parameter format, cannot complete request; size: {size}")
    width, height = size.split("x")
    return int(width), int(height)
