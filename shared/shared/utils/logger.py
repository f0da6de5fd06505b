"""
Request-scoped logging.

Lambda reuses the process between invocations, so the request id is never
stored on a module-level logger. Each run builds a RequestLogger and passes
it down the call chain explicitly.
"""
from __future__ import annotations

import logging
from typing import Any

LOG_FORMAT = "%(levelname)s:%(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Set the root level; add a stream handler only when none is installed.

    The Lambda runtime installs its own handler on the root logger, so
    basicConfig is a no-op there and only takes effect when running locally.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


class RequestLogger(logging.LoggerAdapter):
    """LoggerAdapter that prefixes every record with its context fields."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        context = " ".join(f"{key}={value}" for key, value in self.extra.items())
        return f"[{context}] {msg}", kwargs

    def bind(self, **fields: Any) -> RequestLogger:
        return RequestLogger(self.logger, {**self.extra, **fields})


def request_logger(name: str, request_id: str | None, **fields: Any) -> RequestLogger:
    return RequestLogger(
        logging.getLogger(name),
        {"request_id": request_id or "-", **fields},
    )


def lambda_logger(name: str, context: object, **fields: Any) -> RequestLogger:
    """RequestLogger keyed by the Lambda invocation's aws_request_id."""
    return request_logger(name, getattr(context, "aws_request_id", None), **fields)
