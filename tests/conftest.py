"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Infrastructure: mock_settings, mock_logfire, respx_mock, test_client
2. Sample payloads: text_message_payload, status_only_payload, image_message_payload
3. Messaging: sample_text_message, mock_messaging_service, failing_messaging_service
"""

import copy
import os

import pytest
import respx

# Suppress Logfire warnings when it is not configured
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

from src.models.webhook_models import ExtractedMessage
from src.services.messaging_protocol import MockMessagingService

TEST_VERIFY_TOKEN = "test-verify-token"
TEST_GRAPH_TOKEN = "test-graph-token"
GRAPH_MESSAGES_URL = "https://graph.facebook.com/v18.0/PN1/messages"

TEXT_MESSAGE_PAYLOAD = {
    "object": "whatsapp_business_account",
    "entry": [
        {
            "id": "WABA1",
            "changes": [
                {
                    "field": "messages",
                    "value": {
                        "messaging_product": "whatsapp",
                        "metadata": {
                            "display_phone_number": "15550000000",
                            "phone_number_id": "PN1",
                        },
                        "messages": [
                            {
                                "id": "wamid.1",
                                "from": "15550001234",
                                "timestamp": "1700000000",
                                "type": "text",
                                "text": {"body": "hi"},
                            }
                        ],
                    },
                }
            ],
        }
    ],
}


@pytest.fixture
def respx_mock():
    """Respx router for HTTP mocking of Graph API calls."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def mock_settings():
    """Application settings with test credentials."""
    from src.config import Settings

    return Settings(
        webhook_verify_token=TEST_VERIFY_TOKEN,
        graph_api_token=TEST_GRAPH_TOKEN,
        port="8080",
        env="local",
        logfire_token=None,
        sentry_dsn=None,
    )


@pytest.fixture
def mock_logfire(monkeypatch):
    """
    Mock Logfire for testing without actual logging.

    Every module that logs through Logfire shares the same mock, so tests
    can assert on structured log calls.
    """
    from contextlib import contextmanager
    from unittest.mock import MagicMock, Mock

    @contextmanager
    def mock_span(*args, **kwargs):
        yield {}

    mock_logfire_module = MagicMock()
    mock_logfire_module.info = Mock()
    mock_logfire_module.warn = Mock()
    mock_logfire_module.error = Mock()
    mock_logfire_module.span = mock_span
    mock_logfire_module.configure = Mock()
    mock_logfire_module.instrument_fastapi = Mock()
    mock_logfire_module.instrument_pydantic = Mock()

    monkeypatch.setattr("src.services.whatsapp_service.logfire", mock_logfire_module)
    monkeypatch.setattr("src.services.payload_extractor.logfire", mock_logfire_module)
    monkeypatch.setattr("src.services.message_processor.logfire", mock_logfire_module)
    monkeypatch.setattr("src.logging_config.logfire", mock_logfire_module)
    monkeypatch.setattr("src.main.logfire", mock_logfire_module)

    return mock_logfire_module


@pytest.fixture
def test_client(mock_settings, mock_logfire):
    """FastAPI TestClient with settings injected through dependency overrides."""
    from fastapi.testclient import TestClient

    from src.config import get_settings
    from src.main import app

    app.dependency_overrides[get_settings] = lambda: mock_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Sample Payloads
# =============================================================================


@pytest.fixture
def text_message_payload():
    """Webhook delivery carrying a single text message."""
    return copy.deepcopy(TEXT_MESSAGE_PAYLOAD)


@pytest.fixture
def status_only_payload():
    """Delivery-status webhook without a messages key."""
    return {
        "entry": [
            {
                "changes": [
                    {
                        "value": {
                            "metadata": {"phone_number_id": "123"},
                            "statuses": [{"id": "wamid.1", "status": "delivered"}],
                        }
                    }
                ]
            }
        ]
    }


@pytest.fixture
def image_message_payload(text_message_payload):
    """Webhook delivery carrying an image message."""
    message = text_message_payload["entry"][0]["changes"][0]["value"]["messages"][0]
    message["type"] = "image"
    del message["text"]
    message["image"] = {"id": "media-1", "mime_type": "image/jpeg"}
    return text_message_payload


# =============================================================================
# Messaging
# =============================================================================


@pytest.fixture
def sample_text_message():
    """Extracted text message matching text_message_payload."""
    return ExtractedMessage(
        message_id="wamid.1",
        sender="15550001234",
        type="text",
        text_body="hi",
        phone_number_id="PN1",
    )


@pytest.fixture
def mock_messaging_service():
    """Messaging service that records calls and reports success."""
    return MockMessagingService()


@pytest.fixture
def failing_messaging_service():
    """Messaging service that records calls and reports failure."""
    return MockMessagingService(should_fail=True)
