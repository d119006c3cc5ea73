# quiz_anticheat/utils/scoring.py
import math
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional

DEFAULT_EVENT_TYPE_ALIASES = {
    "TAB_SWITCH_DETECTED": "TAB_SWITCH",
    "COPY_PASTE_ATTEMPT": "CLIPBOARD",
}

MAX_COUNT = 9999
MAX_SCORE = 100

HIGH_RISK_THRESHOLD = 50
MEDIUM_RISK_THRESHOLD = 20


class Rule(NamedTuple):
    rule_id: str
    event_type: str
    title: str
    points_per_hit: int
    max_points: int
    details: str


RULES = (
    Rule(
        "fullscreen_exit", "FULLSCREEN_EXIT", "Fullscreen exit", 20, 40,
        "Leaving fullscreen may mean the student left the exam view.",
    ),
    Rule(
        "tab_switch", "TAB_SWITCH", "Tab switch", 12, 60,
        "Switching tabs during the quiz is a high-risk signal (lookup or collusion).",
    ),
    Rule(
        "window_blur", "WINDOW_BLUR", "Window lost focus", 5, 20,
        "The exam window lost focus (alt-tab, switching application).",
    ),
    Rule(
        "clipboard", "CLIPBOARD", "Copy/Cut/Paste/Context menu", 8, 24,
        "A blocked clipboard action was detected (copy, paste, cut, context menu).",
    ),
    Rule(
        "shortcut", "SHORTCUT", "Suspicious shortcut", 6, 18,
        "A blocked keyboard shortcut was detected (Ctrl/Cmd+C/V/X/A).",
    ),
)


def normalize_event_type(event_type: Any, aliases: Optional[Mapping[str, str]] = None) -> str:
    """
    Map a raw client event type onto the canonical vocabulary.
    Empty or whitespace input gives "". Unknown types pass through unchanged.
    """
    raw = str(event_type).strip() if event_type is not None else ""
    if not raw:
        return ""
    table = DEFAULT_EVENT_TYPE_ALIASES
    if aliases:
        table = {**DEFAULT_EVENT_TYPE_ALIASES, **aliases}
    return table.get(raw, raw)


def clamp_int(value: Any, lo: int, hi: int) -> int:
    # ints are clamped exactly; float() overflows past ~1e308
    if isinstance(value, int):
        return min(hi, max(lo, int(value)))
    try:
        v = float(value)
    except (TypeError, ValueError, OverflowError):
        return lo
    if not math.isfinite(v):
        return lo
    return min(hi, max(lo, math.floor(v)))


def risk_level_from_score(score: int) -> str:
    if score >= HIGH_RISK_THRESHOLD:
        return "high"
    if score >= MEDIUM_RISK_THRESHOLD:
        return "medium"
    return "low"


def _raw_event_type(event: Any) -> Any:
    if isinstance(event, Mapping):
        et = event.get("event_type")
        return et if et is not None else event.get("eventType")
    return getattr(event, "event_type", None)


def count_event_types(events: Iterable[Any], aliases: Optional[Mapping[str, str]] = None) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for e in events or ():
        et = normalize_event_type(_raw_event_type(e), aliases)
        if not et:
            continue
        counts[et] = counts.get(et, 0) + 1
    return counts


def evaluate_rule(rule: Rule, count: int) -> Dict[str, Any]:
    raw_points = count * rule.points_per_hit
    return {
        "rule_id": rule.rule_id,
        "title": rule.title,
        "count": clamp_int(count, 0, MAX_COUNT),
        "points": clamp_int(min(rule.max_points, raw_points), 0, MAX_SCORE),
        "max_points": clamp_int(rule.max_points, 0, MAX_SCORE),
        "details": rule.details,
    }


def compute_quiz_anti_cheat_score(
    events: Iterable[Any], aliases: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """
    Rule-based suspicion score (0..100) for one quiz attempt.

    Only the event type and its count are used; metadata is client-supplied
    and never read. Does not raise for any input.
    """
    counts_by_type = count_event_types(events, aliases)

    breakdown: List[Dict[str, Any]] = [
        evaluate_rule(rule, counts_by_type.get(rule.event_type, 0)) for rule in RULES
    ]

    score = clamp_int(min(MAX_SCORE, sum(item["points"] for item in breakdown)), 0, MAX_SCORE)

    return {
        "suspicion_score": score,
        "risk_level": risk_level_from_score(score),
        "breakdown": [b for b in breakdown if b["count"] > 0 or b["points"] > 0],
        "counts_by_type": counts_by_type,
    }
