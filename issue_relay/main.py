"""HTTP entry point for the issue relay."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, cast

import uvicorn
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from issue_relay import __version__
from issue_relay.models.config import Settings
from issue_relay.resources import get_capability
from issue_relay.tools import Services, build_services
from issue_relay.utils.logging import configure_logging, get_logger
from issue_relay.webhook.handler import WebhookHandler
from issue_relay.webhook.validators import verify_webhook_signature

if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger("main")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


async def root(request: Request) -> PlainTextResponse:
    """Static greeting, used as a liveness probe."""
    del request  # unused but required by Starlette routing
    return PlainTextResponse("Hello World")


async def github_webhook(request: Request) -> JSONResponse:
    """Receive a GitHub webhook delivery.

    The raw body is verified against X-Hub-Signature-256 before it is decoded;
    a delivery that fails verification is never parsed, logged or forwarded.
    """
    settings: Settings = request.app.state.settings
    handler: WebhookHandler = request.app.state.webhook_handler

    event_type = request.headers.get("x-github-event", "")
    delivery_id = request.headers.get("x-github-delivery", "")
    signature = request.headers.get("x-hub-signature-256")

    logger.info(
        "GitHub webhook received",
        extra={"event_type": event_type, "delivery_id": delivery_id},
    )

    body = await request.body()

    if not settings.webhook_secret:
        logger.error("GITHUB_WEBHOOK_SECRET not configured, rejecting delivery")

    if not verify_webhook_signature(body, signature, settings.webhook_secret):
        logger.warning(
            "Signature verification failed",
            extra={"delivery_id": delivery_id, "has_signature": bool(signature)},
        )
        return _error_response(401, "Invalid signature")

    try:
        payload = json.loads(body)
    except ValueError as e:
        logger.warning("Invalid JSON payload", extra={"delivery_id": delivery_id, "error": str(e)})
        return _error_response(400, "Invalid JSON payload")

    logger.debug("Webhook payload", extra={"delivery_id": delivery_id, "payload": payload})

    try:
        result = handler.dispatch(event_type, payload)
    except Exception:
        logger.exception("Error processing GitHub webhook", extra={"delivery_id": delivery_id})
        return _error_response(500, "Internal server error processing webhook")

    logger.info(
        "GitHub webhook processed",
        extra={
            "delivery_id": delivery_id,
            "kind": result.get("kind"),
            "handled": result.get("handled"),
        },
    )

    return JSONResponse({"status": "success", "message": "Webhook received and processed"})


async def capabilities(request: Request) -> JSONResponse:
    """Serve a static capability document."""
    name = request.path_params["name"]
    try:
        document = get_capability(name)
    except KeyError:
        return _error_response(404, "Route not found")
    return JSONResponse(document)


async def http_error(request: Request, exc: Exception) -> JSONResponse:
    """Render HTTP errors; unknown routes and methods both read as not found."""
    del request  # unused but required by Starlette
    http_exc = cast(HTTPException, exc)
    if http_exc.status_code in (404, 405):
        return _error_response(404, "Route not found")
    return _error_response(http_exc.status_code, str(http_exc.detail))


async def server_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for exceptions escaping a route."""
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return _error_response(500, "Internal server error")


def create_app(
    settings: Settings | None = None,
    services: Services | None = None,
    webhook_handler: WebhookHandler | None = None,
) -> Starlette:
    """Build the Starlette application.

    Args:
        settings: Process settings. Read from the environment when omitted.
        services: External service handles. Built from settings when omitted.
        webhook_handler: Handler for verified webhook payloads.

    Returns:
        The application, with settings and handles on ``app.state``.
    """
    if settings is None:
        settings = Settings.from_env()

    configure_logging(settings.log_level)

    app = Starlette(
        routes=[
            Route("/", root, methods=["GET"]),
            Route("/webhook/github", github_webhook, methods=["POST"]),
            Route("/resources/{name}-capabilities", capabilities, methods=["GET"]),
        ],
        exception_handlers={
            HTTPException: http_error,
            Exception: server_error,
        },
    )
    app.state.settings = settings
    app.state.services = services or build_services(settings)
    app.state.webhook_handler = webhook_handler or WebhookHandler()

    return app


def run(settings: Settings | None = None, **overrides: Any) -> None:
    """Validate settings and serve the application with uvicorn.

    Args:
        settings: Process settings. Read from the environment when omitted.
        **overrides: ``host`` / ``port`` taking precedence over settings.

    Raises:
        ConfigurationError: If a required setting is missing. Raised before
            the listener starts.
    """
    if settings is None:
        settings = Settings.from_env()
    settings.validate()

    app = create_app(settings)
    host = overrides.get("host") or settings.host
    port = overrides.get("port") or settings.port

    logger.info(
        "Starting issue-relay",
        extra={"version": __version__, "host": host, "port": port},
    )
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
