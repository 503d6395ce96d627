"""Slack Events API request handling.

Routes one webhook delivery by its top-level ``type``:
- ``url_verification``: echo the challenge
- ``event_callback``: verify the signature, then hand the event to the
  EventDispatcher
- anything else: 404 "bad request"

In ``background`` mode the dispatcher runs in its own asyncio task and the
request is acknowledged immediately; in ``inline`` mode the response waits
for the dispatcher and carries its outcome.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from reacjilator.models.event import ReactionEvent
from reacjilator.models.message import DispatchOutcome
from reacjilator.utils.async_helpers import AuthenticationError, TimeoutError, with_timeout

if TYPE_CHECKING:
    from reacjilator.config.schema import DispatchConfig
    from reacjilator.core.dispatcher import EventDispatcher
    from reacjilator.interfaces.chat import RequestVerifier

log = structlog.get_logger()

BAD_REQUEST_BODY = "bad request"


@dataclass(frozen=True)
class WebhookResponse:
    """Status and body to return to the webhook caller."""

    status: int = 200
    body: dict[str, Any] | str | None = None

    @classmethod
    def bad_request(cls) -> WebhookResponse:
        return cls(status=404, body=BAD_REQUEST_BODY)


class WebhookHandler:
    """Turns raw webhook requests into dispatcher calls.

    Example:
        handler = WebhookHandler(dispatcher, verifier, config.dispatch)
        response = await handler.handle(raw_body, request_headers)
    """

    DEFAULT_SHUTDOWN_TIMEOUT = 30

    def __init__(
        self,
        dispatcher: EventDispatcher,
        verifier: RequestVerifier,
        config: DispatchConfig,
    ) -> None:
        self._dispatcher = dispatcher
        self._verifier = verifier
        self._config = config
        self._active_tasks: set[asyncio.Task[DispatchOutcome]] = set()

    @property
    def active_tasks(self) -> int:
        """Number of events still being processed in the background."""
        return len(self._active_tasks)

    async def handle(self, body: bytes, headers: Mapping[str, str]) -> WebhookResponse:
        """Handle one webhook delivery.

        Args:
            body: Raw request body (needed byte-for-byte for the signature)
            headers: Request headers

        Returns:
            WebhookResponse to send back
        """
        try:
            payload = json.loads(body)
        except (ValueError, UnicodeDecodeError):
            log.warning("webhook_body_not_json", size=len(body))
            return WebhookResponse.bad_request()

        if not isinstance(payload, dict):
            return WebhookResponse.bad_request()

        request_type = payload.get("type")

        if request_type == "url_verification":
            log.info("url_verification_received")
            return WebhookResponse(body={"challenge": payload.get("challenge")})

        if request_type == "event_callback":
            try:
                self._authenticate(body, headers)
            except AuthenticationError as e:
                log.warning("webhook_authentication_failed", error=str(e))
                return WebhookResponse.bad_request()

            event = payload.get("event")
            if not isinstance(event, dict):
                log.warning("event_callback_without_event")
                return WebhookResponse.bad_request()

            return await self._dispatch(ReactionEvent.from_payload(event), payload)

        log.warning("webhook_type_unroutable", request_type=request_type)
        return WebhookResponse.bad_request()

    def _authenticate(self, body: bytes, headers: Mapping[str, str]) -> None:
        if not self._verifier.is_authentic(body, headers):
            raise AuthenticationError("Request signature verification failed")

    async def _dispatch(self, event: ReactionEvent, payload: dict[str, Any]) -> WebhookResponse:
        log.info(
            "event_received",
            event_id=payload.get("event_id"),
            event_type=event.event_type.value,
            emoji=event.emoji_name,
        )

        if self._config.mode == "inline":
            outcome = await self._run(event)
            return WebhookResponse(body={"outcome": outcome.value})

        task = asyncio.create_task(
            self._run(event),
            name=f"reaction_{event.item.channel_id}_{event.item.timestamp}",
        )
        self._active_tasks.add(task)
        task.add_done_callback(self._active_tasks.discard)
        return WebhookResponse()

    async def _run(self, event: ReactionEvent) -> DispatchOutcome:
        try:
            return await with_timeout(
                self._dispatcher.handle(event),
                self._config.processing_timeout,
                f"Reaction processing exceeded {self._config.processing_timeout}s",
            )
        except TimeoutError as e:
            log.error("reaction_processing_timeout", error=str(e))
            return DispatchOutcome.ERROR

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for background tasks, cancelling any still pending at timeout."""
        if not self._active_tasks:
            return

        timeout = self.DEFAULT_SHUTDOWN_TIMEOUT if timeout is None else timeout
        log.info("waiting_for_active_tasks", count=len(self._active_tasks))

        done, pending = await asyncio.wait(set(self._active_tasks), timeout=timeout)

        if pending:
            log.warning("cancelling_pending_tasks", count=len(pending))
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        log.info("tasks_completed", completed=len(done), cancelled=len(pending))
