"""Best-effort extraction of a partial recap from free-form generator output."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from cyberguide.policy.recap_ruleset import FIELD_ALIASES, SECTION_LABELS
from cyberguide.utils.text import normalize_multiline


@dataclass
class PartialRecap:
    """Recap fields as recovered from generator text; any of them may be empty."""

    summary: str = ""
    blockers: List[str] = field(default_factory=list)
    actions: List[str] = field(default_factory=list)
    encouragement: str = ""

    def is_structured(self) -> bool:
        """True when every field carries content."""

        return bool(
            self.summary.strip()
            and self.encouragement.strip()
            and self.blockers
            and self.actions
        )


ParseStrategy = Callable[[str], Optional[PartialRecap]]

_FENCED_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")
_LIST_SPLIT_RE = re.compile(r"[|｜\n,，;；]")
_BULLET_RE = re.compile(r"^(?:[-*•>#]+\s*|\d+[.)、]\s*)+")
_COLON_RE = re.compile(r"[:：]")


def _unique(items: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def extract_json_candidates(text: str) -> List[str]:
    """Fenced blocks first, then the widest ``{...}`` span in the text."""

    candidates = [match.strip() for match in _FENCED_RE.findall(text) if match.strip()]
    first = text.find("{")
    last = text.rfind("}")
    if first >= 0 and last > first:
        candidates.append(text[first : last + 1])
    return _unique(candidates)


def repair_json(candidate: str) -> str:
    repaired = (
        candidate.replace("“", '"')
        .replace("”", '"')
        .replace("‘", "'")
        .replace("’", "'")
    )
    return _TRAILING_COMMA_RE.sub(r"\1", repaired)


def safe_parse_object(candidate: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(repair_json(candidate))
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _lookup(obj: Mapping[str, Any], aliases: Sequence[str]) -> Iterable[Any]:
    lowered = {str(key).strip().lower(): value for key, value in obj.items()}
    for alias in aliases:
        if alias in lowered:
            yield lowered[alias]


def pick_first_string(obj: Mapping[str, Any], aliases: Sequence[str]) -> str:
    for value in _lookup(obj, aliases):
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def pick_first_list(obj: Mapping[str, Any], aliases: Sequence[str]) -> List[str]:
    for value in _lookup(obj, aliases):
        if isinstance(value, list):
            items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        elif isinstance(value, str):
            items = [item.strip() for item in _LIST_SPLIT_RE.split(value) if item.strip()]
        else:
            continue
        if items:
            return items
    return []


def recap_from_object(obj: Mapping[str, Any]) -> PartialRecap:
    return PartialRecap(
        summary=pick_first_string(obj, FIELD_ALIASES["summary"]),
        blockers=pick_first_list(obj, FIELD_ALIASES["blockers"]),
        actions=pick_first_list(obj, FIELD_ALIASES["actions"]),
        encouragement=pick_first_string(obj, FIELD_ALIASES["encouragement"]),
    )


def parse_json_object(text: str) -> Optional[PartialRecap]:
    for candidate in extract_json_candidates(text):
        obj = safe_parse_object(candidate)
        if obj is not None:
            return recap_from_object(obj)
    return None


def _after_colon(line: str) -> str:
    parts = _COLON_RE.split(line, maxsplit=1)
    return parts[1].strip() if len(parts) == 2 else ""


def parse_sections(text: str) -> Optional[PartialRecap]:
    """Bucket labelled lines (``Summary:``, ``Blockers``, ``- item`` ...) into recap fields."""

    lines = [line.strip() for line in text.split("\n") if line.strip()]
    if not lines:
        return None

    buckets: Dict[str, List[str]] = {name: [] for name in SECTION_LABELS}
    current: Optional[str] = None

    for raw_line in lines:
        line = _BULLET_RE.sub("", raw_line.replace("**", "").replace("__", "")).strip()
        if not line:
            continue
        label = next((name for name, pattern in SECTION_LABELS.items() if pattern.match(line)), None)
        if label is not None:
            current = label
            value = _after_colon(line)
            if value:
                buckets[label].append(value)
            continue
        if current is not None:
            buckets[current].append(line)

    return PartialRecap(
        summary=" ".join(buckets["summary"]),
        blockers=buckets["blockers"],
        actions=buckets["actions"],
        encouragement=" ".join(buckets["encouragement"]),
    )


PARSE_STRATEGIES: Sequence[ParseStrategy] = (parse_json_object, parse_sections)


def first_success(strategies: Sequence[ParseStrategy], text: str) -> Optional[PartialRecap]:
    for strategy in strategies:
        result = strategy(text)
        if result is not None:
            return result
    return None


def parse_recap_output(raw_output: Any) -> Optional[PartialRecap]:
    """Run the parse strategies in priority order over raw generator text."""

    if not isinstance(raw_output, str):
        return None
    text = normalize_multiline(raw_output)
    if not text:
        return None
    return first_success(PARSE_STRATEGIES, text)
