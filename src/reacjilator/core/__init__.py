"""Core business logic components.

- LanguageResolver: Maps reaction emoji to target languages
- is_duplicate: Detects translations already posted to a thread
- ReplyPoster: Formats and posts the translated reply
- EventDispatcher: Runs the pipeline for one reaction event
- WebhookHandler: Routes Slack Events API deliveries to the dispatcher
"""

from reacjilator.core.dispatcher import EventDispatcher
from reacjilator.core.duplicate_guard import is_duplicate
from reacjilator.core.language_resolver import LanguageResolver, resolve_language
from reacjilator.core.reply_composer import ReplyPoster, compose_reply
from reacjilator.core.webhook import WebhookHandler, WebhookResponse

__all__ = [
    "EventDispatcher",
    "LanguageResolver",
    "ReplyPoster",
    "WebhookHandler",
    "WebhookResponse",
    "compose_reply",
    "is_duplicate",
    "resolve_language",
]
