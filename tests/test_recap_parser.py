from __future__ import annotations

import json

from cyberguide.services.recap_parser import (
    PARSE_STRATEGIES,
    extract_json_candidates,
    first_success,
    parse_json_object,
    parse_recap_output,
    parse_sections,
)


def test_fenced_block_preferred_over_surrounding_noise() -> None:
    raw = (
        "Sure! Here is the card {not json}\n"
        "```json\n"
        '{"summary": "S", "blockers": ["B"], "actions": ["Write a plan"], "encouragement": "E"}\n'
        "```\nHope it helps {}"
    )

    candidates = extract_json_candidates(raw)
    assert candidates[0].startswith('{"summary"')

    parsed = parse_recap_output(raw)
    assert parsed is not None
    assert parsed.summary == "S"
    assert parsed.actions == ["Write a plan"]
    assert parsed.is_structured()


def test_smart_quotes_and_trailing_commas_are_repaired() -> None:
    raw = "Result: {“summary”: “Busy week”, “blockers”: [“Too much”,], “actions”: [“List tasks”,], “encouragement”: “Keep going”,}"

    parsed = parse_json_object(raw)

    assert parsed is not None
    assert parsed.blockers == ["Too much"]
    assert parsed.encouragement == "Keep going"


def test_aliases_and_delimited_strings_are_accepted() -> None:
    raw = json.dumps(
        {
            "当前状态": "你在努力",
            "Obstacles": "Unclear priorities; shifting scope",
            "next_steps": "Ask the lead | Write a list",
            "鼓励": "慢慢来",
        },
        ensure_ascii=False,
    )

    parsed = parse_recap_output(raw)

    assert parsed is not None
    assert parsed.summary == "你在努力"
    assert parsed.blockers == ["Unclear priorities", "shifting scope"]
    assert parsed.actions == ["Ask the lead", "Write a list"]
    assert parsed.encouragement == "慢慢来"


def test_json_object_with_unknown_keys_is_incomplete() -> None:
    parsed = parse_recap_output('{"mood": "ok"}')

    assert parsed is not None
    assert not parsed.is_structured()


def test_section_heuristic_buckets_labelled_lines() -> None:
    raw = "\n".join(
        [
            "**Summary:** You are juggling too many things.",
            "## Blockers",
            "- No clear priority",
            "- Deadlines overlap",
            "Actions:",
            "1. List the top 3 tasks",
            "2. Ask for one extension",
            "鼓励：一步一步来",
        ]
    )

    parsed = parse_sections(raw)

    assert parsed is not None
    assert parsed.summary == "You are juggling too many things."
    assert parsed.blockers == ["No clear priority", "Deadlines overlap"]
    assert parsed.actions == ["List the top 3 tasks", "Ask for one extension"]
    assert parsed.encouragement == "一步一步来"
    assert parsed.is_structured()


def test_plain_prose_is_not_structured() -> None:
    parsed = parse_recap_output("You talked a lot today. Let's take it slow and rest first.")

    assert parsed is not None
    assert not parsed.is_structured()


def test_empty_or_non_text_output_yields_none() -> None:
    assert parse_recap_output("") is None
    assert parse_recap_output("   \n ") is None
    assert parse_recap_output(None) is None


def test_first_success_stops_at_first_result() -> None:
    calls: list[str] = []

    def never(text: str):
        calls.append("never")
        return None

    def always(text: str):
        calls.append("always")
        return parse_sections(text)

    def unreachable(text: str):  # pragma: no cover - must not run
        calls.append("unreachable")
        return None

    assert first_success([never, always, unreachable], "Summary: hi") is not None
    assert calls == ["never", "always"]
    assert len(PARSE_STRATEGIES) == 2
