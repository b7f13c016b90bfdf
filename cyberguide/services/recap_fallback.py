"""Rule-based recap synthesis used whenever the generator cannot be trusted."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from cyberguide.config import settings
from cyberguide.domain.schemas import ConversationMessage, Recap
from cyberguide.policy.recap_ruleset import (
    ENCOURAGEMENT,
    GENERIC_ACTIONS,
    GENERIC_BLOCKERS,
    GENERIC_SUMMARY,
    MAX_RULE_MATCHES,
    RULES,
    SUMMARY_TEMPLATE,
    RecapRule,
)
from cyberguide.services.recap_sanitizer import sanitize_actions
from cyberguide.utils.text import normalize_inline, normalize_sentence, truncate


def match_rules(text: str) -> List[RecapRule]:
    """Return up to ``MAX_RULE_MATCHES`` rules whose topic pattern occurs in ``text``."""

    matched: List[RecapRule] = []
    if not text:
        return matched
    for rule in RULES:
        if rule.pattern.search(text):
            matched.append(rule)
            if len(matched) >= MAX_RULE_MATCHES:
                break
    return matched


def _append_unique(items: List[str], value: str) -> None:
    if value not in items:
        items.append(value)


def build_fallback_summary(user_texts: Sequence[str], topic_chars: Optional[int] = None) -> str:
    latest = next((text for text in reversed(user_texts) if text), "")
    if not latest:
        return GENERIC_SUMMARY
    topic = truncate(normalize_sentence(latest), topic_chars or settings.recap_topic_chars)
    if not topic:
        return GENERIC_SUMMARY
    return SUMMARY_TEMPLATE.format(topic=topic)


def build_fallback_recap(
    messages: Sequence[ConversationMessage],
    *,
    rng: Optional[random.Random] = None,
) -> Recap:
    """Synthesize a valid recap from the user's own words, without calling the generator."""

    chooser = rng or random
    user_texts = [normalize_inline(m.content) for m in messages if m.role == "user"]
    user_texts = [text for text in user_texts if text]

    blockers: List[str] = []
    actions: List[str] = []
    for rule in match_rules(" ".join(user_texts)):
        _append_unique(blockers, chooser.choice(rule.blocker_candidates))
        _append_unique(actions, chooser.choice(rule.action_candidates))

    if not blockers:
        blockers.append(chooser.choice(GENERIC_BLOCKERS))
    if not actions:
        actions.append(chooser.choice(GENERIC_ACTIONS))

    return Recap(
        summary=build_fallback_summary(user_texts),
        blockers=blockers,
        actions=sanitize_actions(actions, GENERIC_ACTIONS),
        encouragement=ENCOURAGEMENT,
    )
