"""Send messages and read-receipts through the WhatsApp Cloud API."""

import time
from urllib.parse import quote

import httpx
import logfire

from src.constants import (
    GRAPH_API_BASE_URL,
    GRAPH_API_TIMEOUT_SECONDS,
    GRAPH_API_VERSION,
    MAX_LOGGED_RESPONSE_BODY_CHARS,
)
from src.logging_config import mask_pii, redact_tokens
from src.models.message_models import (
    OutboundPayload,
    ReadReceiptPayload,
    ReplyPayload,
)


def graph_messages_url(phone_number_id: str, api_version: str = GRAPH_API_VERSION) -> str:
    """Build the per-phone-number messages endpoint."""
    return f"{GRAPH_API_BASE_URL}/{api_version}/{quote(phone_number_id, safe='')}/messages"


async def post_to_whatsapp_api(
    phone_number_id: str,
    payload: OutboundPayload,
    *,
    api_token: str,
    timeout: float = GRAPH_API_TIMEOUT_SECONDS,
    api_version: str = GRAPH_API_VERSION,
) -> bool:
    """
    POST a payload to the WhatsApp Cloud API messages endpoint.

    Best effort: failures are logged and reported through the return value,
    never raised, and never retried.

    Args:
        phone_number_id: Business phone number ID that routes the call
        payload: Reply or read-receipt payload
        api_token: Graph API bearer token
        timeout: Request timeout in seconds
        api_version: Graph API version segment

    Returns:
        True if the API answered 200, False otherwise
    """
    start_time = time.time()
    url = graph_messages_url(phone_number_id, api_version)
    headers = {
        "Authorization": f"Bearer {api_token}",
        "Content-Type": "application/json",
    }
    payload_type = type(payload).__name__

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(url, headers=headers, json=payload.model_dump())
    except Exception as e:
        # Transport errors, bad URLs and unencodable headers alike
        logfire.error(
            "Error posting to WhatsApp API",
            phone_number_id=phone_number_id,
            payload_type=payload_type,
            error=str(e),
            error_type=type(e).__name__,
            response_time_ms=(time.time() - start_time) * 1000,
        )
        return False

    elapsed = time.time() - start_time
    if response.status_code != 200:
        logfire.error(
            "Error response from WhatsApp API",
            phone_number_id=phone_number_id,
            payload_type=payload_type,
            status_code=response.status_code,
            response_body=response.text[:MAX_LOGGED_RESPONSE_BODY_CHARS],
            request_headers=redact_tokens(headers),
            response_time_ms=elapsed * 1000,
        )
        return False

    logfire.info(
        "WhatsApp API call succeeded",
        phone_number_id=phone_number_id,
        payload_type=payload_type,
        status_code=response.status_code,
        response_time_ms=elapsed * 1000,
    )
    return True


async def send_reply(
    phone_number_id: str,
    to: str,
    body: str,
    message_id: str,
    *,
    api_token: str,
    timeout: float = GRAPH_API_TIMEOUT_SECONDS,
    api_version: str = GRAPH_API_VERSION,
) -> bool:
    """
    Send an echo reply quoting the original message.

    Args:
        phone_number_id: Business phone number ID that received the message
        to: Sender of the original message
        body: Original message body
        message_id: ID of the message being replied to
    """
    logfire.info(
        "Sending WhatsApp reply",
        phone_number_id=phone_number_id,
        recipient=mask_pii(to),
        message_id=message_id,
        message_length=len(body),
    )
    payload = ReplyPayload.echo(to=to, body=body, message_id=message_id)
    return await post_to_whatsapp_api(
        phone_number_id,
        payload,
        api_token=api_token,
        timeout=timeout,
        api_version=api_version,
    )


async def mark_message_as_read(
    phone_number_id: str,
    message_id: str,
    *,
    api_token: str,
    timeout: float = GRAPH_API_TIMEOUT_SECONDS,
    api_version: str = GRAPH_API_VERSION,
) -> bool:
    """Mark an inbound message as read."""
    payload = ReadReceiptPayload(message_id=message_id)
    return await post_to_whatsapp_api(
        phone_number_id,
        payload,
        api_token=api_token,
        timeout=timeout,
        api_version=api_version,
    )
