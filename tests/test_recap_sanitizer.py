from __future__ import annotations

from cyberguide.domain.schemas import Recap
from cyberguide.policy.recap_ruleset import GENERIC_ACTIONS, MAX_ACTION_CHARS
from cyberguide.services.recap_parser import PartialRecap
from cyberguide.services.recap_sanitizer import (
    has_action_verb,
    is_valid_recap,
    sanitize_action,
    sanitize_actions,
    sanitize_blockers,
    sanitize_recap,
)

FALLBACK = Recap(
    summary="You have been stuck, but you are sorting it out",
    blockers=["Too many things at once"],
    actions=["Write one line of the plan"],
    encouragement="Small steps still count",
)


def test_verb_detection_uses_word_boundaries() -> None:
    assert has_action_verb("Send the draft to Alex")
    assert has_action_verb("给导师发一条消息")
    assert not has_action_verb("undoable listing")


def test_action_without_verb_gets_prefix() -> None:
    assert sanitize_action("1. priority items for tomorrow.") == "Do priority items for tomorrow"
    assert sanitize_action("今天的小任务") == "做今天的小任务"


def test_action_label_and_bullets_removed() -> None:
    assert sanitize_action("Action 2: Review the notes") == "Review the notes"
    assert sanitize_action("- Call mom tonight") == "Call mom tonight"


def test_numbers_without_delimiter_are_kept() -> None:
    assert sanitize_action("25 minute focus block") == "Do 25 minute focus block"


def test_long_action_is_capped_and_keeps_verb() -> None:
    action = sanitize_action("a" * 50)

    assert action is not None
    assert len(action) <= MAX_ACTION_CHARS
    assert action.startswith("Do ")
    assert has_action_verb(action)


def test_empty_action_is_dropped() -> None:
    assert sanitize_action("  -  ") is None
    assert sanitize_action("") is None


def test_actions_are_deduplicated_and_capped() -> None:
    actions = sanitize_actions(
        ["Send the email", "Send the email.", "Call Sam", "Review notes", "Plan Friday"],
        FALLBACK.actions,
    )

    assert actions == ["Send the email", "Call Sam", "Review notes"]


def test_actions_fall_back_when_nothing_survives() -> None:
    assert sanitize_actions(["", "  "], FALLBACK.actions) == FALLBACK.actions
    assert sanitize_actions(None, []) == list(GENERIC_ACTIONS[:1])


def test_blockers_capped_and_fall_back() -> None:
    assert sanitize_blockers(["one.", "two", "three"], FALLBACK.blockers) == ["one", "two"]
    assert sanitize_blockers([], FALLBACK.blockers) == FALLBACK.blockers


def test_sanitize_recap_repairs_field_by_field() -> None:
    partial = PartialRecap(
        summary="  You kept working on the thesis. ",
        blockers=[],
        actions=["outline chapter two", "Email the advisor about scope today please"],
        encouragement="",
    )

    recap = sanitize_recap(partial, FALLBACK)

    assert recap.summary == "You kept working on the thesis"
    assert recap.blockers == FALLBACK.blockers
    assert recap.actions[0] == "Do outline chapter two"
    assert recap.encouragement == FALLBACK.encouragement
    assert is_valid_recap(recap)


def test_is_valid_recap_rejects_bad_shapes() -> None:
    assert is_valid_recap(FALLBACK)
    assert not is_valid_recap(FALLBACK.model_copy(update={"blockers": []}))
    assert not is_valid_recap(FALLBACK.model_copy(update={"actions": ["Do " + "x" * 40]}))
    assert not is_valid_recap(FALLBACK.model_copy(update={"actions": ["nothing here"]}))
    assert not is_valid_recap(FALLBACK.model_copy(update={"summary": " "}))


def test_hyphenated_do_is_not_a_verb() -> None:
    assert not has_action_verb("to-do")
    assert sanitize_action("to-do") == "Do to-do"


def test_stacked_list_markers_are_stripped() -> None:
    assert sanitize_action("- - Write") == "Write"
    assert sanitize_action("* 1. Call Sam") == "Call Sam"
