"""FastAPI application exposing the Slack Events API endpoint."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from reacjilator._version import __version__
from reacjilator.config.schema import BridgeConfig
from reacjilator.core.dispatcher import EventDispatcher
from reacjilator.core.webhook import WebhookHandler, WebhookResponse
from reacjilator.utils.security import SlackRequestVerifier

log = structlog.get_logger()


def build_handler(config: BridgeConfig) -> WebhookHandler:
    """Create the webhook handler with the production adapters.

    Args:
        config: Bridge configuration

    Returns:
        WebhookHandler wired to Slack and Google Cloud Translation
    """
    # Imported here so tests can build an app without cloud credentials
    from reacjilator.adapters.chat.slack import SlackAdapter
    from reacjilator.adapters.translation.google import GoogleTranslateAdapter

    chat = SlackAdapter(config.slack)
    translator = GoogleTranslateAdapter(config.translate)
    dispatcher = EventDispatcher(chat, translator, config)
    verifier = SlackRequestVerifier(config.slack.signing_secret)
    return WebhookHandler(dispatcher, verifier, config.dispatch)


def to_http_response(result: WebhookResponse) -> Response:
    if isinstance(result.body, dict):
        return JSONResponse(result.body, status_code=result.status)
    if isinstance(result.body, str):
        return PlainTextResponse(result.body, status_code=result.status)
    return Response(status_code=result.status)


def create_app(config: BridgeConfig, handler: WebhookHandler | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Bridge configuration
        handler: Pre-built webhook handler (defaults to ``build_handler(config)``)

    Returns:
        Configured FastAPI app
    """
    webhook = handler or build_handler(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("server_started", path=config.server.path, mode=config.dispatch.mode)
        yield
        await webhook.drain()
        log.info("server_stopped")

    app = FastAPI(title="reacjilator", version=__version__, lifespan=lifespan)
    app.state.webhook = webhook

    @app.post(config.server.path)
    async def slack_events(request: Request) -> Response:
        body = await request.body()
        result = await webhook.handle(body, request.headers)
        return to_http_response(result)

    @app.get("/healthz")
    async def healthz() -> dict[str, str | int]:
        return {
            "status": "ok",
            "version": __version__,
            "active_tasks": webhook.active_tasks,
        }

    return app
