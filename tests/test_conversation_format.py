from __future__ import annotations

from cyberguide.domain.schemas import ConversationMessage
from cyberguide.services.conversation_format import TRUNCATION_MARKER, format_conversation


def test_format_numbers_surviving_messages_with_role_labels() -> None:
    messages = [
        ConversationMessage(role="assistant", content="Hi there"),
        ConversationMessage(role="user", content="   "),
        ConversationMessage(role="user", content="I feel\n\nstuck"),
        ConversationMessage(role="system", content="note"),
    ]

    text = format_conversation(messages, 1000)

    assert text.split("\n") == [
        "1. Assistant: Hi there",
        "2. User: I feel stuck",
        "3. System: note",
    ]


def test_empty_history_formats_to_empty_string() -> None:
    assert format_conversation([], 100) == ""
    assert format_conversation([ConversationMessage(role="user", content="")], 100) == ""


def test_long_history_keeps_recent_text_within_budget() -> None:
    messages = [
        ConversationMessage(role="user" if i % 2 == 0 else "assistant", content=f"turn {i} " + "x" * 80)
        for i in range(70)
    ]

    text = format_conversation(messages, 500)

    assert len(text) <= 500
    assert text.startswith(TRUNCATION_MARKER)
    assert "turn 69" in text
    assert "turn 0 " not in text


def test_tiny_budget_still_respected() -> None:
    messages = [ConversationMessage(role="user", content="a fairly long message body")]

    text = format_conversation(messages, 10)

    assert len(text) == 10
    assert text.endswith("body")
