"""FastAPI application initialization."""

import logging
from contextlib import asynccontextmanager

import logfire
import sentry_sdk
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration

from src.api import webhook
from src.config import get_settings
from src.constants import ROOT_PAGE_HTML
from src.logging_config import setup_logfire

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"

ALL_METHODS = [
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "OPTIONS",
    "TRACE",
    "CONNECT",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()

    # Initialize Logfire for observability
    setup_logfire(app, settings)

    # Initialize Sentry if DSN is provided
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            send_default_pii=False,
            integrations=[FastApiIntegration()],
        )

    logfire.info(
        "Server is listening on port: {port}",
        port=settings.listen_port(),
        environment=settings.env,
        graph_api_version=settings.graph_api_version,
    )

    yield

    logfire.info("Application shutdown complete")


# Docs routes are disabled: every path other than /webhook serves the info page
app = FastAPI(
    title="WhatsApp Echo Relay",
    description="Echoes WhatsApp text messages back to their sender",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# Register routers before the catch-all route so /webhook matches first
app.include_router(webhook.router, prefix="/webhook", tags=["webhook"])


@app.api_route("/", methods=ALL_METHODS)
@app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
def root(request: Request):
    """Informational page for every path other than the webhook."""
    logger.info("Received %s request for %s", request.method, request.url.path)
    return HTMLResponse(ROOT_PAGE_HTML)


def run() -> None:
    """Start the HTTP listener on the configured port.

    An invalid PORT or a failed bind terminates the process.
    """
    settings = get_settings()
    try:
        port = settings.listen_port()
    except ValueError as e:
        raise SystemExit(f"Invalid PORT setting: {e}") from e

    uvicorn.run(
        "src.main:app", host="0.0.0.0", port=port, reload=settings.reload_enabled()
    )


if __name__ == "__main__":
    run()
