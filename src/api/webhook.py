"""WhatsApp webhook endpoints.

GET performs the subscription handshake, POST ingests message events and
relays text messages back to their sender. The handlers focus on HTTP
concerns and delegate the relay workflow to the MessageProcessor service.

A POST is acknowledged with 200 once the payload parsed, whatever happened
to the outbound calls: the platform only needs to know the event arrived.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect

from src.config import Settings, get_settings
from src.constants import SUBSCRIBE_MODE
from src.services.message_processor import MessageProcessor, get_message_processor
from src.services.payload_extractor import extract_message

logger = logging.getLogger(__name__)
router = APIRouter()

UNSUPPORTED_METHODS = ["PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT"]


def message_processor_dependency(
    settings: Settings = Depends(get_settings),
) -> MessageProcessor:
    """Provide a MessageProcessor bound to the application settings."""
    return get_message_processor(settings)


@router.get("")
async def verify_webhook(request: Request, settings: Settings = Depends(get_settings)):
    """WhatsApp webhook verification endpoint."""
    mode = request.query_params.get("hub.mode", "")
    token = request.query_params.get("hub.verify_token", "")
    challenge = request.query_params.get("hub.challenge", "")

    if mode != SUBSCRIBE_MODE or token != settings.webhook_verify_token:
        logger.warning("Webhook verification failed (mode=%s)", mode)
        return PlainTextResponse("Forbidden", status_code=403)

    logger.info("Webhook verified successfully")
    return PlainTextResponse(challenge)


@router.post("")
async def handle_webhook(
    request: Request,
    processor: MessageProcessor = Depends(message_processor_dependency),
):
    """Handle incoming WhatsApp webhook events."""
    try:
        body = await request.body()
    except ClientDisconnect:
        logger.warning("Client disconnected while sending webhook body")
        return PlainTextResponse("Invalid request body", status_code=400)

    logger.info("Incoming webhook message: %s", body.decode("utf-8", errors="replace"))

    try:
        payload = json.loads(body)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        logger.warning("Invalid JSON in webhook body: %s", type(e).__name__)
        return PlainTextResponse("Invalid JSON", status_code=400)

    if not isinstance(payload, dict):
        logger.warning("Webhook body is not a JSON object")
        return PlainTextResponse("Invalid JSON", status_code=400)

    message = extract_message(payload)
    if message is not None:
        try:
            await processor.process(message)
        except Exception as e:
            logger.error("Error relaying message: %s", e, exc_info=True)

    return Response(status_code=200)


@router.api_route("", methods=UNSUPPORTED_METHODS, include_in_schema=False)
async def method_not_allowed():
    """Reject every method other than GET and POST."""
    return PlainTextResponse(
        "Method not allowed", status_code=405, headers={"Allow": "GET, POST"}
    )
