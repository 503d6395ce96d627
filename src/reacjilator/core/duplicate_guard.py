"""Detection of translations that were already posted to a thread."""

from __future__ import annotations

from collections.abc import Sequence

from reacjilator.models.message import ThreadMessage


def is_duplicate(thread: Sequence[ThreadMessage], translated_text: str) -> bool:
    """Return True if the thread already holds this translation.

    Every message is inspected. A message counts as an earlier translation
    post only if it has a subtype (bot posts carry ``bot_message``) and its
    first attachment's text equals ``translated_text`` exactly.
    """
    return any(
        message.is_reply_subtype and message.existing_attachment_text == translated_text
        for message in thread
    )
