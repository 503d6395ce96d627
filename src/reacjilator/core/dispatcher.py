"""Reaction event pipeline orchestrator.

The EventDispatcher handles one ``reaction_added`` event:
1. Ignore anything that is not a reaction on a message
2. Resolve the emoji to a target language (stop if unknown)
3. Wait a random startup delay
4. Fetch the message and its thread
5. Translate the message text (messages without text get a notice instead)
6. Stop if the thread already holds the same translation
7. Post the translation as a threaded reply
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import structlog

from reacjilator.core.duplicate_guard import is_duplicate
from reacjilator.core.language_resolver import LanguageResolver
from reacjilator.core.reply_composer import ReplyPoster
from reacjilator.models.event import EventType, ReactionEvent, SubjectType
from reacjilator.models.message import DispatchOutcome
from reacjilator.utils.async_helpers import FetchError, TranslationError, random_jitter
from reacjilator.utils.logging import bind_context, unbind_context

if TYPE_CHECKING:
    from reacjilator.config.schema import BridgeConfig
    from reacjilator.interfaces.chat import ChatProvider
    from reacjilator.interfaces.translation import TranslationProvider
    from reacjilator.utils.async_helpers import Delay

log = structlog.get_logger()

_CONTEXT_KEYS = ("channel_id", "message_ts", "emoji")


class EventDispatcher:
    """Runs the translation pipeline for one reaction event at a time.

    The dispatcher holds no per-event state, so concurrent ``handle`` calls
    are independent. Failures never escape ``handle``; they are logged and
    reported through the returned DispatchOutcome.

    Example:
        dispatcher = EventDispatcher(chat, translator, config)
        outcome = await dispatcher.handle(event)
    """

    def __init__(
        self,
        chat: ChatProvider,
        translator: TranslationProvider,
        config: BridgeConfig,
        resolver: LanguageResolver | None = None,
        delay: Delay | None = None,
    ) -> None:
        """Initialize the EventDispatcher.

        Args:
            chat: Chat provider for fetching threads and posting replies
            translator: Translation provider
            config: Bridge configuration
            resolver: Emoji to language resolver (defaults to the built-in table
                plus configured overrides)
            delay: Startup delay (defaults to random jitter up to
                ``dispatch.max_jitter_ms``)
        """
        self._chat = chat
        self._translator = translator
        self._config = config
        self._resolver = resolver or LanguageResolver(overrides=config.languages.overrides)
        self._delay = delay or random_jitter(config.dispatch.max_jitter_ms)
        self._poster = ReplyPoster(chat, config.slack.bot_username)

    async def handle(self, event: ReactionEvent) -> DispatchOutcome:
        """Process a reaction event through the pipeline.

        Args:
            event: Reaction event taken from the webhook payload

        Returns:
            DispatchOutcome indicating how the event ended
        """
        if (
            event.event_type is not EventType.REACTION_ADDED
            or event.item.subject_type is not SubjectType.MESSAGE
        ):
            log.debug(
                "reaction_ignored",
                event_type=event.event_type.value,
                subject_type=event.item.subject_type.value,
            )
            return DispatchOutcome.IGNORED

        language = self._resolver.resolve(event.emoji_name)
        if language is None:
            log.debug("emoji_not_mapped", emoji=event.emoji_name)
            return DispatchOutcome.UNRESOLVED_EMOJI

        bind_context(
            channel_id=event.item.channel_id,
            message_ts=event.item.timestamp,
            emoji=event.emoji_name,
        )
        try:
            log.info("translation_requested", user_id=event.user_id, language=language)

            start_time = time.monotonic()
            outcome = await self._run(event, language)
            log.info(
                "reaction_processed",
                outcome=outcome.value,
                duration_seconds=round(time.monotonic() - start_time, 2),
            )
            return outcome
        finally:
            unbind_context(*_CONTEXT_KEYS)

    async def _run(self, event: ReactionEvent, language: str) -> DispatchOutcome:
        channel_id = event.item.channel_id

        try:
            slept = await self._delay()
            log.debug("startup_delay", delay_ms=round(slept * 1000))

            try:
                thread = await self._chat.fetch_thread(channel_id, event.item.timestamp)
            except FetchError as e:
                log.warning("thread_fetch_failed", error=str(e))
                return DispatchOutcome.FETCH_FAILED

            if not thread:
                log.warning("thread_fetch_empty")
                return DispatchOutcome.FETCH_FAILED

            message = thread[0]

            if not message.text:
                # Files and other text-less messages get the "not supported" notice
                log.info("message_has_no_text")
                posted = await self._poster.post(
                    message, None, language, channel_id, event.emoji_name
                )
                return DispatchOutcome.UNSUPPORTED_POSTED if posted else DispatchOutcome.POST_FAILED

            try:
                result = await self._translator.translate(message.text, language)
            except TranslationError as e:
                log.warning("translation_failed", language=language, error=str(e))
                return DispatchOutcome.TRANSLATION_FAILED

            if is_duplicate(thread, result.translated_text):
                log.info("duplicate_translation_suppressed", language=language)
                return DispatchOutcome.DUPLICATE

            posted = await self._poster.post(
                message, result.translated_text, language, channel_id, event.emoji_name
            )
            return DispatchOutcome.POSTED if posted else DispatchOutcome.POST_FAILED

        except Exception as e:
            log.exception("reaction_processing_failed", error=str(e))
            return DispatchOutcome.ERROR
