"""Deterministic plan naming."""

from __future__ import annotations

import re
from typing import Sequence

_AMPERSAND = re.compile(r"\s+&\s+")

FALLBACK_NAMES: dict[int, str] = {
    4: "4-Day Targeted Muscle Split",
    5: "5-Day Strength & Conditioning",
}


def build_plan_name(days_per_week: int, goal: str | None, focuses: Sequence[str | None]) -> str:
    """Name a plan from its frequency, goal and realized day focuses.

    Examples:
        >>> build_plan_name(3, "strength", [])
        '3-Day Push/Pull/Legs Program'
        >>> build_plan_name(4, None, ["Chest", "Back", "Legs", "Shoulders"])
        '4-Day Chest/Back/Legs/Shoulders Split'
        >>> build_plan_name(6, "endurance", [])
        '6-Day Endurance Program'
    """
    try:
        days = max(1, int(days_per_week))
    except (TypeError, ValueError):
        days = 1

    if days == 1:
        return "1-Day Full Body Routine"
    if days == 2:
        return "2-Day Upper/Lower Split"
    if days == 3:
        return "3-Day Push/Pull/Legs Program"

    if days in (4, 5):
        distinct: list[str] = []
        for focus in focuses:
            cleaned = _AMPERSAND.sub(" & ", (focus or "").strip())
            if cleaned and cleaned not in distinct:
                distinct.append(cleaned)
        if len(distinct) >= min(days, 2):
            return f"{days}-Day {'/'.join(distinct[:days])} Split"
        return FALLBACK_NAMES[days]

    goal_text = (goal or "").strip()
    label = goal_text[:1].upper() + goal_text[1:] if goal_text else "Training"
    return f"{days}-Day {label} Program"
