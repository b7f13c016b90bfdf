"""Static recap configuration: action verbs, topic rules, candidate pools and labels.

Everything here is immutable and loaded once at import. Bump ``RULESET_VERSION``
whenever pools or patterns change so analytics can tell card generations apart.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Pattern, Sequence, Tuple

RULESET_VERSION = "2025.1"

ACTION_VERBS: Tuple[str, ...] = (
    "do",
    "write",
    "send",
    "ask",
    "organize",
    "review",
    "submit",
    "list",
    "contact",
    "confirm",
    "schedule",
    "try",
    "complete",
    "check",
    "communicate",
    "plan",
    "draft",
    "book",
    "call",
    "finish",
    "pick",
)

ACTION_VERBS_ZH: Tuple[str, ...] = (
    "做",
    "写",
    "发",
    "问",
    "整理",
    "复习",
    "提交",
    "列",
    "联系",
    "确认",
    "安排",
    "尝试",
    "完成",
    "检查",
    "沟通",
    "规划",
)

ACTION_VERB_RE: Pattern[str] = re.compile(
    r"(?<![-\w])(?:" + "|".join(ACTION_VERBS) + r")\b|" + "|".join(ACTION_VERBS_ZH),
    re.IGNORECASE,
)

VERB_PREFIX = "Do "
VERB_PREFIX_ZH = "做"

MAX_BLOCKERS = 2
MAX_ACTIONS = 3
MAX_ACTION_CHARS = 30


def _topic(english: Sequence[str], chinese: Sequence[str]) -> Pattern[str]:
    parts = [r"\b(?:" + "|".join(english) + r")"]
    if chinese:
        parts.append("|".join(chinese))
    return re.compile("|".join(parts), re.IGNORECASE)


@dataclass(frozen=True)
class RecapRule:
    """Topic pattern with the blocker/action candidates it may contribute."""

    name: str
    pattern: Pattern[str]
    blocker_candidates: Tuple[str, ...]
    action_candidates: Tuple[str, ...]


RULES: Tuple[RecapRule, ...] = (
    RecapRule(
        name="direction",
        pattern=_topic(
            ("lost", "confused", "unsure", "not sure", "don't know", "no idea", "direction",
             "which path", "can't decide", "torn between", "undecided"),
            ("迷茫", "不知道", "不确定", "方向", "选择", "纠结"),
        ),
        blocker_candidates=(
            "The direction still feels unclear, so decisions keep flip-flopping",
            "Too many open options are competing for attention",
            "It is hard to commit without knowing what matters most",
        ),
        action_candidates=(
            "List 3 options, 1 step each",
            "Ask one mentor for a view",
            "Try one option for a week",
        ),
    ),
    RecapRule(
        name="procrastination",
        pattern=_topic(
            ("procrastinat", "can't start", "can't get started", "putting it off", "putting off",
             "no motivation", "unmotivated", "can't focus", "keep delaying"),
            ("拖延", "动不起来", "执行不了", "坚持不住", "不行动"),
        ),
        blocker_candidates=(
            "Getting started feels costly, so thinking outpaces doing",
            "The first step is too big to begin comfortably",
            "Waiting for the right mood keeps delaying the start",
        ),
        action_candidates=(
            "Do a 25-minute task now",
            "Try a 10-minute first step",
            "Schedule one focus block",
        ),
    ),
    RecapRule(
        name="anxiety",
        pattern=_topic(
            ("anxious", "anxiety", "stress", "pressure", "worried", "worry", "afraid", "scared",
             "nervous", "overthink"),
            ("焦虑", "压力", "害怕", "担心", "紧张", "内耗"),
        ),
        blocker_candidates=(
            "Stress is high and is eating into the energy to act",
            "Worry about outcomes is crowding out the next step",
            "Pressure keeps building without a clear release",
        ),
        action_candidates=(
            "Write tomorrow's top 3 to-dos",
            "Write down what worries you",
            "Schedule a 15-minute break",
        ),
    ),
    RecapRule(
        name="time",
        pattern=_topic(
            ("deadline", "no time", "too busy", "overload", "too many tasks", "too much to do",
             "swamped", "running out of time"),
            ("时间", "太忙", "任务多", "安排不过来", "排不开"),
        ),
        blocker_candidates=(
            "Tasks are piling up without a clear priority order",
            "Too much is due at once to see what comes first",
            "The schedule has no room left for the important work",
        ),
        action_candidates=(
            "Plan tomorrow in time blocks",
            "List tasks and pick the top 3",
            "Check which deadline is first",
        ),
    ),
    RecapRule(
        name="interpersonal",
        pattern=_topic(
            ("roommate", "classmate", "teacher", "professor", "advisor", "boss", "manager",
             "coworker", "colleague", "relationship", "communicat"),
            ("沟通", "室友", "同学", "老师", "领导", "同事", "关系", "表达"),
        ),
        blocker_candidates=(
            "The goal of the conversation is unclear, so speaking up feels costly",
            "Expectations on both sides have not been said out loud",
            "Worry about the relationship makes it hard to be direct",
        ),
        action_candidates=(
            "Ask one question to confirm",
            "Write the one point to say",
            "Schedule a 10-minute talk",
        ),
    ),
)

MAX_RULE_MATCHES = 2

GENERIC_BLOCKERS: Tuple[str, ...] = (
    "The next step is not concrete enough yet",
    "There are many thoughts but no single starting point",
)
GENERIC_ACTIONS: Tuple[str, ...] = (
    "Do one 10-minute task today",
    "Write down the very next step",
    "Try one small step tonight",
)

GENERIC_SUMMARY = "You are working to put the problem into words and are ready to take a step forward"
SUMMARY_TEMPLATE = 'You have been stuck on "{topic}", but you are already starting to sort it out'
ENCOURAGEMENT = "One small stroke at a time is enough, and the water opens up once you start moving"

# --- Generator output vocabulary --------------------------------------------

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "summary": ("summary", "recap", "current_state", "current state", "当前状态", "一句话概括", "一句话"),
    "blockers": ("blockers", "blocker", "obstacles", "核心卡点", "卡点", "阻碍"),
    "actions": ("actions", "next_steps", "next steps", "action_items", "小动作", "行动", "明天前行动"),
    "encouragement": ("encouragement", "cheer", "鼓励句", "鼓励"),
}

SECTION_LABELS: Dict[str, Pattern[str]] = {
    "summary": re.compile(
        r"^(?:summary|recap|current state|当前状态|一句话概括|一句话|状态)\s*(?:[:：]|$)", re.IGNORECASE
    ),
    "blockers": re.compile(r"^(?:blockers?|obstacles?|核心卡点|卡点|阻碍)\s*(?:[:：]|$)", re.IGNORECASE),
    "actions": re.compile(
        r"^(?:actions?|next steps?|action items?|小动作|行动|明天前可做)\s*(?:[:：]|$)", re.IGNORECASE
    ),
    "encouragement": re.compile(r"^(?:encouragement|鼓励句|鼓励)\s*(?:[:：]|$)", re.IGNORECASE),
}

RECAP_SYSTEM_PROMPT = "\n".join(
    [
        "You are Cyber Guide. Turn the conversation below into a recap card.",
        "Output JSON only, with no explanation before or after it.",
        "The JSON must have exactly this shape:",
        '{"summary": "", "blockers": [""], "actions": [""], "encouragement": ""}',
        "Rules:",
        "1) summary is one sentence",
        "2) blockers has 1-2 items",
        "3) actions has 1-3 items, each at most 30 characters and starting with a concrete verb "
        "(do/write/send/ask/organize/review/submit/list/...)",
        "4) encouragement is sincere and warm, not a cliche",
    ]
)
