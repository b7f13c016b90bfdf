"""Whitespace, punctuation and length normalisation shared by the recap pipeline."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_SENTENCE_END_RE = re.compile(r"[。.!?！？…]+$")
_DANGLING_TAIL_RE = re.compile(r"[，,。.!?！？、;；:：\s]+$")


def normalize_inline(text: str | None) -> str:
    """Collapse whitespace runs to one space, drop control characters and trim."""

    if not text:
        return ""
    collapsed = _WHITESPACE_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", _CONTROL_RE.sub("", collapsed)).strip()


def normalize_sentence(text: str | None) -> str:
    """Inline-normalise and strip trailing sentence-ending punctuation."""

    return _SENTENCE_END_RE.sub("", normalize_inline(text)).rstrip()


def normalize_multiline(text: str | None) -> str:
    if not text:
        return ""
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()


def truncate(text: str, max_len: int) -> str:
    """Cut ``text`` to ``max_len`` characters without leaving a dangling comma or space."""

    if len(text) <= max_len:
        return text
    return _DANGLING_TAIL_RE.sub("", text[: max(max_len, 0)])


def contains_cjk(text: str) -> bool:
    return any("一" <= ch <= "鿿" for ch in text)
