"""Render chat history into the bounded, line-numbered transcript sent to the generator."""

from __future__ import annotations

from typing import Dict, Sequence

from cyberguide.domain.schemas import ConversationMessage
from cyberguide.utils.text import normalize_inline

ROLE_LABELS: Dict[str, str] = {
    "user": "User",
    "assistant": "Assistant",
    "system": "System",
}

TRUNCATION_MARKER = "[Earlier conversation truncated; most recent messages kept]"


def format_conversation(messages: Sequence[ConversationMessage], max_chars: int) -> str:
    """Return ``messages`` as numbered ``"<n>. <Role>: <content>"`` lines within ``max_chars``.

    Empty messages are skipped. When the transcript is too long, the oldest text is
    dropped and a marker line is prepended; the result never exceeds ``max_chars``.
    """

    lines = []
    for message in messages:
        content = normalize_inline(message.content)
        if not content:
            continue
        label = ROLE_LABELS.get(message.role, message.role.title())
        lines.append(f"{len(lines) + 1}. {label}: {content}")

    full = "\n".join(lines)
    if len(full) <= max_chars:
        return full
    if max_chars <= 0:
        return ""

    header = f"{TRUNCATION_MARKER}\n"
    if len(header) >= max_chars:
        return full[-max_chars:]
    return header + full[-(max_chars - len(header)):]
