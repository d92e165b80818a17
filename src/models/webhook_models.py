"""Inbound WhatsApp Cloud API webhook models.

The envelope is loosely typed: unknown fields are ignored and every level
is optional, so status-only deliveries validate cleanly. Arrays are kept
as ``list[Any]`` because only their first element is ever consulted; it
is validated on demand by the payload extractor.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.constants import TEXT_MESSAGE_TYPE


class WebhookModel(BaseModel):
    """Base for webhook models: ignore unknown fields, never mutate."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class Metadata(WebhookModel):
    """Business phone number the event was delivered for."""

    phone_number_id: str | None = None
    display_phone_number: str | None = None


class ChangeValue(WebhookModel):
    """Payload of a single change notification."""

    messaging_product: str | None = None
    metadata: Metadata | None = None
    messages: list[Any] | None = None
    statuses: list[Any] | None = None


class Change(WebhookModel):
    field: str | None = None
    value: ChangeValue


class Entry(WebhookModel):
    id: str | None = None
    changes: list[Any] = Field(default_factory=list)


class WebhookEnvelope(WebhookModel):
    """Webhook root: ``{object, entry: [Entry]}``."""

    object: str | None = None
    entry: list[Any] = Field(default_factory=list)


class TextContent(WebhookModel):
    body: str


class InboundMessage(WebhookModel):
    """A single message object from ``value.messages``."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str
    from_: str = Field(alias="from")
    type: str
    text: TextContent | None = None


class ExtractedMessage(WebhookModel):
    """Message fields needed to relay a reply, plus the routing identifier."""

    message_id: str = Field(..., description="WhatsApp message ID (wamid)")
    sender: str = Field(..., description="Sender phone number")
    type: str = Field(..., description="Message type (text, image, ...)")
    text_body: str | None = Field(
        default=None, description="Message body, only for text messages"
    )
    phone_number_id: str = Field(
        ..., description="Business phone number ID used for outbound calls"
    )

    @property
    def is_text(self) -> bool:
        """Whether this message should be echoed back."""
        return self.type == TEXT_MESSAGE_TYPE and self.text_body is not None
