"""
API Gateway (Lambda proxy integration) response builders.

Every body is JSON; errors always use the {"error": "<message>"} shape.
"""
from __future__ import annotations

import json
import logging
from typing import Any

from shared.exceptions import ImageServiceError

JSON_HEADERS = {"Content-Type": "application/json; charset=utf-8"}


def json_response(status_code: int, body: Any = None) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": "" if body is None else json.dumps(body),
    }


def error_response(exc: ImageServiceError) -> dict[str, Any]:
    return json_response(exc.status_code, {"error": exc.public_message})


def server_error_response() -> dict[str, Any]:
    return json_response(500, {"error": "Server error"})


def redirect_response(location: str) -> dict[str, Any]:
    """301 to the public location of a newly created object."""
    return {
        "statusCode": 301,
        "headers": {"Location": location},
        "body": "",
    }


def render_error(exc: Exception, log: logging.LoggerAdapter) -> dict[str, Any]:
    """Log a failed request and build its response; unknown errors become 500."""
    if isinstance(exc, ImageServiceError):
        if exc.status_code >= 500:
            log.error("%s: %s", type(exc).__name__, exc.message)
        else:
            log.warning("%s: %s", type(exc).__name__, exc.message)
        return error_response(exc)
    log.exception("Unhandled error: %s", exc)
    return server_error_response()
