"""Message relay orchestration service.

The webhook handler focuses on HTTP concerns while MessageProcessor handles
the relay workflow for an extracted message:
1. Skip anything that is not a text message
2. Send the echo reply
3. Mark the original message as read

Both outbound calls are sequential and best effort. Their outcome is
reported for logging only and never changes the webhook acknowledgment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import logfire

from src.config import Settings
from src.models.webhook_models import ExtractedMessage
from src.services.messaging_protocol import MessagingService, get_messaging_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelayOutcome:
    """Result of relaying one message."""

    relayed: bool
    reply_sent: bool = False
    marked_read: bool = False


class MessageProcessor:
    """Relay an inbound text message back to its sender.

    Example:
        >>> processor = MessageProcessor(get_messaging_service(settings))
        >>> await processor.process(message)
        RelayOutcome(relayed=True, reply_sent=True, marked_read=True)

        # With a mock service for testing:
        >>> processor = MessageProcessor(MockMessagingService())
    """

    def __init__(self, messaging_service: MessagingService):
        self._messaging = messaging_service

    async def process(self, message: ExtractedMessage) -> RelayOutcome:
        """Send the echo reply, then the read-receipt, for a text message.

        Args:
            message: Message extracted from the webhook payload

        Returns:
            RelayOutcome describing which outbound calls succeeded
        """
        if not message.is_text:
            logger.info(
                "Ignoring %s message %s", message.type, message.message_id
            )
            return RelayOutcome(relayed=False)

        reply_sent = await self._messaging.send_reply(message)
        marked_read = await self._messaging.mark_as_read(message)

        outcome = RelayOutcome(
            relayed=True, reply_sent=reply_sent, marked_read=marked_read
        )
        if reply_sent and marked_read:
            logfire.info(
                "Message relayed",
                phone_number_id=message.phone_number_id,
                message_id=message.message_id,
            )
        else:
            logfire.warn(
                "Message relay incomplete",
                phone_number_id=message.phone_number_id,
                message_id=message.message_id,
                reply_sent=reply_sent,
                marked_read=marked_read,
            )
        return outcome


def get_message_processor(settings: Settings) -> MessageProcessor:
    """Build a MessageProcessor bound to the WhatsApp Cloud API."""
    return MessageProcessor(get_messaging_service(settings))
