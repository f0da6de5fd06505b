"""
Callback delivery — POST a finalized image's details to its owner.
"""
from __future__ import annotations

import requests

from image_service.config import Settings
from shared.events.publishers import build_callback_payload, deliver_callback
from shared.events.schemas import CallbackMessage
from shared.imaging import validation
from shared.utils.logger import RequestLogger


def send_callback(
    settings: Settings,
    log: RequestLogger,
    message: CallbackMessage,
    *,
    session: requests.Session | None = None,
) -> int | None:
    """Deliver one callback. Returns the HTTP status, or None when skipped."""
    validation.require_fields(
        callback_url=message.callback_url,
        bucket=message.bucket,
        file_id=message.file_id,
        file_extension=message.file_extension,
    )
    payload = build_callback_payload(message)

    if settings.is_test:
        log.info("Callback skipped in TEST environment: url=%s", message.callback_url)
        return None

    response = deliver_callback(
        message.callback_url,
        payload,
        api_secret_key=settings.api_secret_key,
        username=settings.api_username,
        password=settings.api_password,
        session=session,
    )
    log.info(
        "Callback complete: url=%s status=%d response=%s",
        message.callback_url,
        response.status_code,
        response.text,
    )
    return response.status_code
