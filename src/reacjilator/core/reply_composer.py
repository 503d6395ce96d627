"""Reply formatting and posting.

The translation is posted as a legacy attachment: the pretext names the
emoji and language, the body holds the translation and the footer echoes
the original text. Messages without text get a fixed notice instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from reacjilator.models.message import ReplyAttachment, ThreadMessage
from reacjilator.utils.async_helpers import PostError

if TYPE_CHECKING:
    from reacjilator.interfaces.chat import ChatProvider

log = structlog.get_logger()

NOT_SUPPORTED_PRETEXT = "_Sorry, the language is not supported!_ :persevere:"


def translated_pretext(emoji_name: str, language: str) -> str:
    return f"_The message is translated in_ :{emoji_name}: _({language})_"


def compose_reply(
    message: ThreadMessage,
    translated_text: str | None,
    language: str,
    emoji_name: str,
) -> ReplyAttachment:
    """Build the reply attachment for ``message``.

    A message without text, or a missing translation, produces the
    "not supported" notice with no body or footer.
    """
    if not message.text or translated_text is None:
        return ReplyAttachment(preceding_label=NOT_SUPPORTED_PRETEXT)

    return ReplyAttachment(
        preceding_label=translated_pretext(emoji_name, language),
        body_text=translated_text,
        footer_text=message.text,
    )


class ReplyPoster:
    """Composes the reply and posts it to the message's thread.

    Posting failures are logged and swallowed; there is no retry.
    """

    def __init__(self, chat: ChatProvider, username: str) -> None:
        """Initialize the poster.

        Args:
            chat: Chat provider used to post
            username: Bot display name shown on the reply
        """
        self._chat = chat
        self._username = username

    async def post(
        self,
        message: ThreadMessage,
        translated_text: str | None,
        language: str,
        channel_id: str,
        emoji_name: str,
    ) -> bool:
        """Post the reply anchored at the thread root.

        Args:
            message: The reacted-to message
            translated_text: Translation, or None when translation was bypassed
            language: Target language code
            channel_id: Channel to post in
            emoji_name: Emoji that triggered the translation

        Returns:
            True if the platform accepted the post
        """
        attachment = compose_reply(message, translated_text, language, emoji_name)
        thread_ts = message.thread_anchor

        try:
            message_ts = await self._chat.post_reply(
                channel_id=channel_id,
                thread_ts=thread_ts,
                attachments=[attachment.to_slack()],
                username=self._username,
            )
        except PostError as e:
            log.error("reply_post_failed", channel_id=channel_id, thread_ts=thread_ts, error=str(e))
            return False

        log.info(
            "translation_posted",
            channel_id=channel_id,
            thread_ts=thread_ts,
            message_ts=message_ts,
            language=language,
        )
        return True
