"""Abstract interface for chat platform integrations."""

from collections.abc import Mapping
from typing import Any, Protocol

from ..models.message import ThreadMessage


class ChatProvider(Protocol):
    """Remote chat platform operations used by the translation pipeline."""

    async def fetch_thread(self, channel_id: str, timestamp: str) -> list[ThreadMessage]:
        """
        Fetch a message and its thread context.

        Args:
            channel_id: Channel containing the message
            timestamp: Timestamp (ts) of the reacted-to message

        Returns:
            Messages in the order the platform returned them, root first

        Raises:
            FetchError: If the request fails or the response is malformed
        """
        ...

    async def post_reply(
        self,
        channel_id: str,
        thread_ts: str,
        attachments: list[dict[str, Any]],
        username: str,
    ) -> str:
        """
        Post attachments as a threaded reply under a bot display name.

        Args:
            channel_id: Target channel identifier
            thread_ts: Timestamp of the thread root to reply under
            attachments: Rendered attachment dicts
            username: Display name for the post (impersonation disabled)

        Returns:
            Timestamp of the posted message

        Raises:
            PostError: If message delivery fails
        """
        ...


class RequestVerifier(Protocol):
    """Decides whether an inbound webhook request is authentic."""

    def is_authentic(self, body: bytes, headers: Mapping[str, str]) -> bool:
        """
        Check the request signature.

        Args:
            body: Raw request body, exactly as received
            headers: Request headers

        Returns:
            True if the request was signed by the chat platform
        """
        ...
