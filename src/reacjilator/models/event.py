"""Data models for inbound reaction events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventType(Enum):
    """Kind of Slack event delivered in an ``event_callback``."""

    REACTION_ADDED = "reaction_added"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> EventType:
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class SubjectType(Enum):
    """Kind of item a reaction was attached to."""

    MESSAGE = "message"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> SubjectType:
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class ReactionItem:
    """The item that received the reaction."""

    subject_type: SubjectType
    channel_id: str
    timestamp: str


@dataclass(frozen=True)
class ReactionEvent:
    """A single reaction event taken from a webhook delivery."""

    event_type: EventType
    user_id: str
    emoji_name: str
    item: ReactionItem

    @classmethod
    def from_payload(cls, event: dict[str, Any]) -> ReactionEvent:
        """Build an event from the nested Slack ``event`` object.

        Missing fields become empty strings; the dispatcher decides whether
        the result is actionable.
        """
        item = event.get("item") or {}
        return cls(
            event_type=EventType.parse(event.get("type")),
            user_id=str(event.get("user") or ""),
            emoji_name=str(event.get("reaction") or ""),
            item=ReactionItem(
                subject_type=SubjectType.parse(item.get("type")),
                channel_id=str(item.get("channel") or ""),
                timestamp=str(item.get("ts") or ""),
            ),
        )
