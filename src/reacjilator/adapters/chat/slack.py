"""Slack chat adapter using the slack_sdk async Web API client.

Implements the ChatProvider protocol:
- ``conversations.replies`` to fetch the reacted-to message and its thread
- ``chat.postMessage`` to post the translation as a threaded reply
"""

from __future__ import annotations

from typing import Any

import aiohttp
import structlog
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from ...config.schema import SlackConfig
from ...models.message import ThreadMessage
from ...utils.async_helpers import FetchError, PostError

log = structlog.get_logger()

# Transport-level failures surfaced by the aiohttp based client
_TRANSPORT_ERRORS = (SlackClientError, aiohttp.ClientError, TimeoutError)


class SlackAdapter:
    """Slack adapter implementing the ChatProvider protocol.

    Example:
        config = SlackConfig(bot_token="xoxb-...", signing_secret="...")
        adapter = SlackAdapter(config)

        thread = await adapter.fetch_thread("C123", "1700000000.000100")
        await adapter.post_reply("C123", thread[0].thread_anchor, attachments, "Bot")
    """

    def __init__(self, config: SlackConfig, client: AsyncWebClient | None = None) -> None:
        """Initialize the Slack adapter.

        Args:
            config: Slack-specific configuration.
            client: Pre-built Web API client (tests inject a mock here).
        """
        self._config = config
        self._client = client or AsyncWebClient(token=config.bot_token, base_url=config.api_url)

    async def fetch_thread(self, channel_id: str, timestamp: str) -> list[ThreadMessage]:
        """Fetch the message at ``timestamp`` and its thread replies.

        Args:
            channel_id: Channel containing the message.
            timestamp: Timestamp of the reacted-to message.

        Returns:
            Messages in platform order, root first.

        Raises:
            FetchError: If the request fails or the response is malformed.
        """
        try:
            result = await self._client.conversations_replies(
                channel=channel_id,
                ts=timestamp,
                limit=self._config.thread_fetch_limit,
                inclusive=True,
            )
        except SlackApiError as e:
            log.error(
                "fetch_thread_failed",
                channel_id=channel_id,
                ts=timestamp,
                error=e.response.get("error"),
            )
            raise FetchError(f"conversations.replies failed: {e}") from e
        except _TRANSPORT_ERRORS as e:
            log.error("fetch_thread_failed", channel_id=channel_id, ts=timestamp, error=str(e))
            raise FetchError(f"conversations.replies failed: {e}") from e

        messages = result.get("messages")
        if not isinstance(messages, list):
            log.error("fetch_thread_malformed", channel_id=channel_id, ts=timestamp)
            raise FetchError("conversations.replies response has no messages list")

        try:
            thread = [ThreadMessage.from_slack(message) for message in messages]
        except (AttributeError, TypeError, IndexError) as e:
            log.error("fetch_thread_malformed", channel_id=channel_id, ts=timestamp, error=str(e))
            raise FetchError(f"Malformed message in conversations.replies: {e}") from e

        log.debug("thread_fetched", channel_id=channel_id, ts=timestamp, count=len(thread))
        return thread

    async def post_reply(
        self,
        channel_id: str,
        thread_ts: str,
        attachments: list[dict[str, Any]],
        username: str,
    ) -> str:
        """Post attachments as a reply in a thread.

        Args:
            channel_id: Target channel identifier.
            thread_ts: Timestamp of the thread root.
            attachments: Rendered attachment dicts.
            username: Bot display name.

        Returns:
            Message ID (ts) of the sent message.

        Raises:
            PostError: If message delivery fails.
        """
        try:
            result = await self._client.chat_postMessage(
                channel=channel_id,
                attachments=attachments,
                as_user=False,
                username=username,
                thread_ts=thread_ts,
            )
        except SlackApiError as e:
            log.error(
                "post_reply_failed",
                channel_id=channel_id,
                thread_ts=thread_ts,
                error=e.response.get("error"),
            )
            raise PostError(f"chat.postMessage failed: {e}") from e
        except _TRANSPORT_ERRORS as e:
            log.error("post_reply_failed", channel_id=channel_id, thread_ts=thread_ts, error=str(e))
            raise PostError(f"chat.postMessage failed: {e}") from e

        message_ts = str(result.get("ts", ""))
        log.info(
            "post_reply_response",
            channel_id=channel_id,
            thread_ts=thread_ts,
            ok=result.get("ok"),
            message_ts=message_ts,
        )
        return message_ts
