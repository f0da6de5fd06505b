"""
Notifiers — fire-and-forget delivery of completion events.

QueuePublisher pushes a message onto an SQS queue looked up by name.
deliver_callback POSTs a payload to the caller's webhook.
Neither retries; redelivery is left to SQS.
"""
from __future__ import annotations


import boto3
import requests
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel

from shared.events.schemas import CallbackMessage, CallbackPayload
from shared.exceptions import ServerError
from shared.imaging.schemas import CompletionEvent

CALLBACK_TIMEOUT_SECONDS = 10


class QueuePublisher:
    """Send JSON messages to an SQS queue identified by its name."""

    def __init__(self, client=None, *, region: str | None = None) -> None:
        self._client = client or boto3.client("sqs", region_name=region or None)

    def publish(self, queue_name: str, message: BaseModel) -> str:
        """Send message; returns the SQS message id."""
        try:
            queue_url = self._client.get_queue_url(QueueName=queue_name)["QueueUrl"]
            response = self._client.send_message(
                QueueUrl=queue_url,
                MessageBody=message.model_dump_json(),
            )
        except (BotoCoreError, ClientError) as exc:
            raise ServerError(f"Failed to send message to queue {queue_name}: {exc}") from exc
        return response.get("MessageId", "")


def build_callback_message(
    event: CompletionEvent,
    *,
    callback_url: str,
    directory: str,
    file_id: str,
    file_extension: str,
) -> CallbackMessage:
    return CallbackMessage(
        callback_url=callback_url,
        bucket=event.bucket,
        directory=directory,
        file_id=file_id,
        file_extension=file_extension,
        width=event.width,
        height=event.height,
        size_bytes=event.size_bytes,
    )


def build_callback_payload(message: CallbackMessage) -> CallbackPayload:
    return CallbackPayload(
        bucket=message.bucket,
        directory=message.directory,
        file_id=message.file_id,
        file_extension=message.file_extension,
        width=message.width,
        height=message.height,
        size_bytes=message.size_bytes,
    )


def deliver_callback(
    url: str,
    payload: CallbackPayload,
    *,
    api_secret_key: str = "",
    username: str = "",
    password: str = "",
    session: requests.Session | None = None,
) -> requests.Response:
    """POST the payload to url. Non-2xx responses are returned, not raised."""
    headers = {"Content-Type": "application/json; charset=utf-8"}
    if api_secret_key:
        headers["Authorization"] = f"Apikey {api_secret_key}"
    auth = (username, password) if username and password else None

    http = session or requests
    try:
        return http.post(
            url,
            data=payload.model_dump_json(),
            headers=headers,
            auth=auth,
            timeout=CALLBACK_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        raise ServerError(f"Callback to {url} failed: {exc}") from exc
