"""Shape enforcement for recap cards: counts, lengths, verbs and de-duplication."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from cyberguide.domain.schemas import Recap
from cyberguide.policy.recap_ruleset import (
    ACTION_VERB_RE,
    GENERIC_ACTIONS,
    MAX_ACTION_CHARS,
    MAX_ACTIONS,
    MAX_BLOCKERS,
    VERB_PREFIX,
    VERB_PREFIX_ZH,
)
from cyberguide.services.recap_parser import PartialRecap
from cyberguide.utils.text import contains_cjk, normalize_sentence, truncate

_ACTION_LABEL_RE = re.compile(r"^(?:action|行动)\s*\d*\s*[:：]\s*", re.IGNORECASE)
_ORDINAL_RE = re.compile(r"^(?:[-*•]+\s*|第?\d+(?:[)）.、:：]|\s+-\s)\s*)+")


def has_action_verb(text: str) -> bool:
    return bool(ACTION_VERB_RE.search(text or ""))


def is_valid_recap(recap: Recap) -> bool:
    """Check the card invariant: non-empty prose, 1-2 blockers, 1-3 short verb-led actions."""

    if not recap.summary.strip() or not recap.encouragement.strip():
        return False
    if not 1 <= len(recap.blockers) <= MAX_BLOCKERS:
        return False
    if not 1 <= len(recap.actions) <= MAX_ACTIONS:
        return False
    return all(len(action) <= MAX_ACTION_CHARS and has_action_verb(action) for action in recap.actions)


def _with_verb(action: str) -> str:
    prefix = VERB_PREFIX_ZH if contains_cjk(action) else VERB_PREFIX
    return f"{prefix}{action}"


def sanitize_action(raw: str) -> Optional[str]:
    """Normalise one action, forcing a verb and the length cap; ``None`` if nothing is left."""

    action = _ACTION_LABEL_RE.sub("", normalize_sentence(raw))
    action = _ORDINAL_RE.sub("", action).strip()
    if not action:
        return None

    if not has_action_verb(action):
        action = _with_verb(action)

    action = truncate(action, MAX_ACTION_CHARS)
    if not has_action_verb(action):
        action = truncate(_with_verb(action), MAX_ACTION_CHARS)

    return action or None


def _collect_actions(items: Iterable[str]) -> List[str]:
    cleaned: List[str] = []
    for item in items:
        action = sanitize_action(item)
        if not action or action in cleaned:
            continue
        cleaned.append(action)
        if len(cleaned) >= MAX_ACTIONS:
            break
    return cleaned


def sanitize_actions(items: Optional[Iterable[str]], fallback: Iterable[str]) -> List[str]:
    cleaned = _collect_actions(items or [])
    if cleaned:
        return cleaned
    cleaned = _collect_actions(fallback)
    return cleaned or _collect_actions(GENERIC_ACTIONS[:1])


def sanitize_blockers(items: Optional[Iterable[str]], fallback: Iterable[str]) -> List[str]:
    cleaned: List[str] = []
    for item in items or []:
        blocker = normalize_sentence(item)
        if not blocker or blocker in cleaned:
            continue
        cleaned.append(blocker)
        if len(cleaned) >= MAX_BLOCKERS:
            break
    if cleaned:
        return cleaned
    return list(fallback)[:MAX_BLOCKERS]


def sanitize_recap(partial: PartialRecap, fallback: Recap) -> Recap:
    """Repair ``partial`` into a valid recap, borrowing from ``fallback`` field by field."""

    return Recap(
        summary=normalize_sentence(partial.summary) or fallback.summary,
        blockers=sanitize_blockers(partial.blockers, fallback.blockers),
        actions=sanitize_actions(partial.actions, fallback.actions),
        encouragement=normalize_sentence(partial.encouragement) or fallback.encouragement,
    )
