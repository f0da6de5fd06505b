"""
Image pipeline — error taxonomy.

Every failure a pipeline run can hit is one of three outward classes, each
with a preset status code so adapters never pick one at the call site:

  UserError      400  bad/missing input, unsupported type, oversized payload
  NotFoundError  404  the source object does not exist
  ServerError    500  storage, codec or configuration failure

ServerError keeps the underlying cause for the logs but only ever shows
"Server error" to the caller.
"""
from __future__ import annotations


class ImageServiceError(Exception):
    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        """Message safe to return to the caller."""
        return self.message


class UserError(ImageServiceError):
    status_code = 400
    default_message = "Bad request."


class NotFoundError(ImageServiceError):
    status_code = 404
    default_message = "Not found."

    @property
    def public_message(self) -> str:
        return self.default_message


class ServerError(ImageServiceError):
    status_code = 500
    default_message = "Server error"

    @property
    def public_message(self) -> str:
        return self.default_message
