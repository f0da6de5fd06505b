"""
Validation gates. Checks run in a fixed order so a later check never masks
an earlier one: presence -> size token -> download -> byte size -> type.
"""
from __future__ import annotations

from shared.exceptions import UserError
from shared.imaging.constants import EXTENSION_MAP, VALID_IMAGE_FORMATS


def require_fields(**fields: str | None) -> None:
    """Raise UserError naming every empty field."""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        present = ", ".join(f"{name}: {value or ''}" for name, value in fields.items())
        raise UserError(
            f"Missing parameters, cannot complete request; "
            f"missing: {', '.join(missing)} ({present})"
        )


def check_byte_size(num_bytes: int, max_bytes: int, key: str) -> None:
    if num_bytes > max_bytes:
        raise UserError(f"File is too large: {num_bytes}, {key}")


def check_content_type(content_type: str, key: str) -> None:
    if content_type not in VALID_IMAGE_FORMATS:
        raise UserError(f"Unsupported file type: {content_type}, {key}")


def check_extension(extension: str | None) -> str:
    """Return the mime subtype for a supported upload extension."""
    subtype = EXTENSION_MAP.get((extension or "").lower())
    if subtype is None:
        raise UserError(f"Unsupported extension: {extension or ''}")
    return subtype
