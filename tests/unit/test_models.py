"""Tests for event and message models."""

from collections.abc import Callable
from typing import Any

import pytest

from reacjilator.models.event import EventType, ReactionEvent, SubjectType
from reacjilator.models.message import DispatchOutcome, ReplyAttachment, ThreadMessage


class TestReactionEvent:
    """Tests for ReactionEvent.from_payload."""

    def test_from_payload(self) -> None:
        event = ReactionEvent.from_payload(
            {
                "type": "reaction_added",
                "user": "U123",
                "reaction": "flag-jp",
                "item": {"type": "message", "channel": "C1", "ts": "100.1"},
                "event_ts": "100.2",
            }
        )

        assert event.event_type is EventType.REACTION_ADDED
        assert event.user_id == "U123"
        assert event.emoji_name == "flag-jp"
        assert event.item.subject_type is SubjectType.MESSAGE
        assert event.item.channel_id == "C1"
        assert event.item.timestamp == "100.1"

    def test_unknown_types_map_to_other(self) -> None:
        event = ReactionEvent.from_payload(
            {
                "type": "reaction_removed",
                "user": "U123",
                "reaction": "fr",
                "item": {"type": "file", "file": "F1"},
            }
        )

        assert event.event_type is EventType.OTHER
        assert event.item.subject_type is SubjectType.OTHER
        assert event.item.channel_id == ""

    def test_missing_fields(self) -> None:
        event = ReactionEvent.from_payload({})

        assert event.event_type is EventType.OTHER
        assert event.emoji_name == ""
        assert event.item.subject_type is SubjectType.OTHER

    def test_event_is_immutable(self, make_event: Callable[..., ReactionEvent]) -> None:
        event = make_event()
        with pytest.raises(AttributeError):
            event.emoji_name = "fr"  # type: ignore[misc]


class TestThreadMessage:
    """Tests for ThreadMessage.from_slack."""

    def test_root_message(self, slack_message: Callable[..., dict[str, Any]]) -> None:
        message = ThreadMessage.from_slack(slack_message())

        assert message.text == "Hello"
        assert message.timestamp == "100.1"
        assert message.thread_root_timestamp is None
        assert message.is_reply_subtype is False
        assert message.existing_attachment_text is None
        assert message.thread_anchor == "100.1"

    def test_thread_reply_anchors_to_root(
        self, slack_message: Callable[..., dict[str, Any]]
    ) -> None:
        message = ThreadMessage.from_slack(slack_message(ts="100.5", thread_ts="100.1"))

        assert message.thread_anchor == "100.1"

    def test_bot_post_with_attachment(self, slack_message: Callable[..., dict[str, Any]]) -> None:
        message = ThreadMessage.from_slack(
            slack_message(
                text="",
                subtype="bot_message",
                attachments=[{"text": "こんにちは", "footer": "Hello"}, {"text": "second"}],
            )
        )

        assert message.text is None
        assert message.is_reply_subtype is True
        assert message.existing_attachment_text == "こんにちは"

    def test_file_message_without_text(self) -> None:
        message = ThreadMessage.from_slack({"ts": "100.1", "files": [{"id": "F1"}]})

        assert message.text is None

    def test_raw_excluded_from_equality(self) -> None:
        first = ThreadMessage.from_slack({"ts": "1", "text": "a", "client_msg_id": "x"})
        second = ThreadMessage.from_slack({"ts": "1", "text": "a", "client_msg_id": "y"})

        assert first == second


class TestReplyAttachment:
    """Tests for ReplyAttachment rendering."""

    def test_full_attachment(self) -> None:
        attachment = ReplyAttachment(
            preceding_label="label", body_text="body", footer_text="footer"
        )

        assert attachment.to_slack() == {
            "pretext": "label",
            "text": "body",
            "footer": "footer",
            "mrkdwn_in": ["text", "pretext"],
        }

    def test_label_only(self) -> None:
        attachment = ReplyAttachment(preceding_label="notice")

        assert attachment.to_slack() == {
            "pretext": "notice",
            "mrkdwn_in": ["text", "pretext"],
        }


def test_dispatch_outcome_values() -> None:
    assert DispatchOutcome("duplicate") is DispatchOutcome.DUPLICATE
    assert DispatchOutcome.POSTED.value == "posted"
