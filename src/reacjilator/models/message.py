"""Data models for thread messages, translations and replies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class ThreadMessage:
    """A message returned by ``conversations.replies``, root first."""

    text: str | None
    timestamp: str
    thread_root_timestamp: str | None  # None if not in a thread
    is_reply_subtype: bool
    existing_attachment_text: str | None

    # Platform-specific metadata
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_slack(cls, message: dict[str, Any]) -> ThreadMessage:
        attachments = message.get("attachments") or []
        first_attachment = attachments[0] if attachments else {}
        return cls(
            text=message.get("text") or None,
            timestamp=str(message.get("ts", "")),
            thread_root_timestamp=message.get("thread_ts"),
            is_reply_subtype=bool(message.get("subtype")),
            existing_attachment_text=first_attachment.get("text"),
            raw=message,
        )

    @property
    def thread_anchor(self) -> str:
        """Timestamp a reply must be posted under to land in this thread."""
        return self.thread_root_timestamp or self.timestamp


@dataclass(frozen=True)
class TranslationResult:
    """Output of one translate request."""

    translated_text: str
    target_language: str
    detected_source_language: str | None = None


@dataclass(frozen=True)
class ReplyAttachment:
    """A legacy Slack attachment posted as the translation reply."""

    preceding_label: str
    body_text: str | None = None
    footer_text: str | None = None

    def to_slack(self) -> dict[str, Any]:
        attachment: dict[str, Any] = {"pretext": self.preceding_label}
        if self.body_text is not None:
            attachment["text"] = self.body_text
        if self.footer_text is not None:
            attachment["footer"] = self.footer_text
        attachment["mrkdwn_in"] = ["text", "pretext"]
        return attachment


class DispatchOutcome(Enum):
    """Outcome of handling one reaction event."""

    IGNORED = "ignored"
    UNRESOLVED_EMOJI = "unresolved_emoji"
    POSTED = "posted"
    UNSUPPORTED_POSTED = "unsupported_posted"
    DUPLICATE = "duplicate"
    FETCH_FAILED = "fetch_failed"
    TRANSLATION_FAILED = "translation_failed"
    POST_FAILED = "post_failed"
    ERROR = "error"
