"""Outbound WhatsApp Cloud API payload models.

Field order matches the documented request bodies, so ``model_dump()``
serializes to exactly the JSON the Graph API expects.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.constants import ECHO_PREFIX, MESSAGING_PRODUCT, READ_STATUS


class OutboundModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class TextBody(OutboundModel):
    body: str


class MessageContext(OutboundModel):
    """Quoted message reference for replies."""

    message_id: str


class ReplyPayload(OutboundModel):
    """Text reply quoting the original message."""

    messaging_product: str = MESSAGING_PRODUCT
    to: str = Field(..., description="Recipient phone number")
    text: TextBody
    context: MessageContext

    @classmethod
    def echo(cls, to: str, body: str, message_id: str) -> "ReplyPayload":
        """Build the echo reply for an inbound text message."""
        return cls(
            to=to,
            text=TextBody(body=f"{ECHO_PREFIX}{body}"),
            context=MessageContext(message_id=message_id),
        )


class ReadReceiptPayload(OutboundModel):
    """Marks an inbound message as read."""

    messaging_product: str = MESSAGING_PRODUCT
    status: Literal["read"] = READ_STATUS
    message_id: str


OutboundPayload = ReplyPayload | ReadReceiptPayload
