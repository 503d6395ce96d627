"""Data models and transfer objects."""

from .event import EventType, ReactionEvent, ReactionItem, SubjectType
from .message import (
    DispatchOutcome,
    ReplyAttachment,
    ThreadMessage,
    TranslationResult,
)

__all__ = [
    # Event models
    "EventType",
    "SubjectType",
    "ReactionItem",
    "ReactionEvent",
    # Message models
    "ThreadMessage",
    "TranslationResult",
    "ReplyAttachment",
    "DispatchOutcome",
]
