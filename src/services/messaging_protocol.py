"""Messaging abstraction protocols for decoupling from the WhatsApp API.

This module provides a Protocol-based abstraction for the outbound calls,
allowing the application to:
- Mock messaging in tests without httpx mocking
- Support dependency injection from the FastAPI layer
"""

from typing import Protocol

from src.config import Settings
from src.constants import GRAPH_API_TIMEOUT_SECONDS, GRAPH_API_VERSION
from src.models.webhook_models import ExtractedMessage
from src.services import whatsapp_service


class MessagingService(Protocol):
    """Protocol for replying to and acknowledging inbound messages.

    Both methods are best effort: they report failure through the return
    value and must not raise.
    """

    async def send_reply(self, message: ExtractedMessage) -> bool:
        """Send the echo reply for a text message.

        Returns:
            True if the reply was accepted by the platform, False otherwise
        """
        ...

    async def mark_as_read(self, message: ExtractedMessage) -> bool:
        """Send the read-receipt for a message.

        Returns:
            True if the receipt was accepted by the platform, False otherwise
        """
        ...


class WhatsAppMessagingService:
    """WhatsApp Cloud API implementation of MessagingService.

    Binds the Graph API credentials once so request handlers never touch
    configuration directly.

    Example:
        >>> service = WhatsAppMessagingService(api_token="...")
        >>> await service.send_reply(message)
        True
    """

    def __init__(
        self,
        api_token: str,
        timeout: float = GRAPH_API_TIMEOUT_SECONDS,
        api_version: str = GRAPH_API_VERSION,
    ):
        self._token = api_token
        self._timeout = timeout
        self._api_version = api_version

    async def send_reply(self, message: ExtractedMessage) -> bool:
        return await whatsapp_service.send_reply(
            message.phone_number_id,
            to=message.sender,
            body=message.text_body or "",
            message_id=message.message_id,
            api_token=self._token,
            timeout=self._timeout,
            api_version=self._api_version,
        )

    async def mark_as_read(self, message: ExtractedMessage) -> bool:
        return await whatsapp_service.mark_message_as_read(
            message.phone_number_id,
            message.message_id,
            api_token=self._token,
            timeout=self._timeout,
            api_version=self._api_version,
        )


class MockMessagingService:
    """Mock implementation for testing.

    Records every call in order so tests can assert on sequencing.

    Example:
        >>> service = MockMessagingService()
        >>> await service.send_reply(message)
        True
        >>> service.calls
        [('reply', message)]
    """

    def __init__(self, should_fail: bool = False):
        """Initialize mock service.

        Args:
            should_fail: Whether every call should report failure
        """
        self._should_fail = should_fail
        self.calls: list[tuple[str, ExtractedMessage]] = []

    async def send_reply(self, message: ExtractedMessage) -> bool:
        self.calls.append(("reply", message))
        return not self._should_fail

    async def mark_as_read(self, message: ExtractedMessage) -> bool:
        self.calls.append(("read", message))
        return not self._should_fail


def get_messaging_service(settings: Settings) -> WhatsAppMessagingService:
    """Factory function to get a MessagingService bound to the given settings."""
    return WhatsAppMessagingService(
        api_token=settings.graph_api_token,
        timeout=settings.graph_api_timeout_seconds,
        api_version=settings.graph_api_version,
    )
