"""Extract the first message from a WhatsApp webhook envelope."""

from typing import Any

import logfire
from pydantic import ValidationError

from src.models.webhook_models import (
    Change,
    ChangeValue,
    Entry,
    ExtractedMessage,
    InboundMessage,
    WebhookEnvelope,
)


def _first(items: list[Any]) -> Any:
    """Return the first element of a list, or None when it is empty."""
    return items[0] if items else None


def _first_change_value(payload: Any) -> ChangeValue:
    """Navigate ``entry[0].changes[0].value``.

    Raises:
        ValidationError: If any level is missing or has an unexpected shape.
    """
    envelope = WebhookEnvelope.model_validate(payload)
    entry = Entry.model_validate(_first(envelope.entry))
    change = Change.model_validate(_first(entry.changes))
    return change.value


def extract_message(payload: Any) -> ExtractedMessage | None:
    """
    Extract the first message and its routing identifier from a webhook payload.

    Status callbacks (delivery and read receipts) carry no ``messages`` key
    and are a normal input, as is any envelope that does not match the
    expected shape. Both yield None instead of an error.

    Args:
        payload: Parsed JSON body of the webhook delivery

    Returns:
        ExtractedMessage for the first message, or None if there is nothing
        to act on. Non-text messages are returned with ``text_body`` unset.
    """
    try:
        value = _first_change_value(payload)
    except ValidationError as e:
        logfire.info(
            "Webhook payload has no change value",
            error_count=e.error_count(),
        )
        return None

    if not value.messages:
        logfire.info(
            "Ignoring webhook event without messages",
            status_count=len(value.statuses or []),
        )
        return None

    phone_number_id = value.metadata.phone_number_id if value.metadata else None
    if not phone_number_id:
        logfire.warn("Webhook message has no phone_number_id")
        return None

    try:
        message = InboundMessage.model_validate(value.messages[0])
    except ValidationError as e:
        logfire.warn(
            "Webhook message has unexpected shape",
            phone_number_id=phone_number_id,
            error_count=e.error_count(),
        )
        return None

    return ExtractedMessage(
        message_id=message.id,
        sender=message.from_,
        type=message.type,
        text_body=message.text.body if message.text else None,
        phone_number_id=phone_number_id,
    )
