"""Weekly split planning and focus label resolution."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from app.ml.planning.constants import FOCUS_SPLITS, Focus
from app.ml.planning.types import ExerciseRecord


def planned_focuses(days_per_week: int) -> list[str]:
    """Return the ordered focus labels for a training frequency.

    1 → Full Body; 2 → Upper/Lower; 3 → Push/Pull/Legs; 4-7 → targeted
    splits that add Arms, Core & Abs and Cardio & Conditioning in turn.
    Frequencies above 7 produce generic ``"Day N"`` labels.
    """
    try:
        days = max(1, int(days_per_week))
    except (TypeError, ValueError):
        days = 1
    split = FOCUS_SPLITS.get(days)
    if split is not None:
        return [focus.value for focus in split]
    return [f"Day {i + 1}" for i in range(days)]


def _infer_focus(muscle_group: str) -> Focus | None:
    mg = muscle_group.lower()
    if "full" in mg or "total" in mg or mg == "general":
        return Focus.FULL_BODY
    if "core" in mg or "abs" in mg or "abdom" in mg:
        return Focus.CORE
    if "cardio" in mg or "conditioning" in mg:
        return Focus.CARDIO
    if "chest" in mg or "pector" in mg:
        return Focus.CHEST
    if "back" in mg or "lat" in mg:
        return Focus.BACK
    if "shoulder" in mg or "delt" in mg:
        return Focus.SHOULDERS
    if "arm" in mg or "bice" in mg or "trice" in mg:
        return Focus.ARMS
    if "leg" in mg or "quad" in mg or "glute" in mg or "hamstring" in mg or "calf" in mg or "calves" in mg:
        return Focus.LEGS
    if "upper" in mg:
        return Focus.UPPER_BODY
    if "lower" in mg:
        return Focus.LOWER_BODY
    if "mobility" in mg or "stretch" in mg or "recovery" in mg:
        return Focus.MOBILITY
    return None


def resolve_focus(label: str, exercises: Iterable[ExerciseRecord] = ()) -> str:
    """Return an allowed focus label for a day.

    Labels already in the ``Focus`` set are kept. Anything else (the generic
    ``"Day N"`` labels) is inferred from the most common muscle group among
    the day's exercises, defaulting to Full Body.
    """
    if label in Focus.labels():
        return label

    inferred = _infer_focus(label or "")
    if inferred is not None:
        return inferred.value

    counts = Counter(
        (exercise.muscle_group or "").strip().lower()
        for exercise in exercises
        if (exercise.muscle_group or "").strip()
    )
    for muscle_group, _ in counts.most_common():
        inferred = _infer_focus(muscle_group)
        if inferred is not None:
            return inferred.value
    return Focus.FULL_BODY.value
