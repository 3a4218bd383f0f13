"""Set/rep/rest prescription and time estimation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from app.ml.planning.constants import PlanLimits
from app.ml.planning.types import ExerciseRecord, PlanExerciseItem


@dataclass(frozen=True)
class Prescription:
    """Sets, reps and rest for one exercise plus its estimated working time."""

    sets: int
    reps: int
    rest_seconds: int
    estimated_seconds: int


def _base_scheme(goal: str, difficulty: str) -> tuple[int, int, int]:
    if "strength" in goal or "power" in goal:
        return 4, 5, 120
    if "endurance" in goal:
        return 3, 18, 45
    if "hypertrophy" in goal or "muscle" in goal or "gain" in goal:
        return 3, 10, 60
    if difficulty == "beginner":
        return 2, 12, 60
    if difficulty == "advanced":
        return 4, 8, 90
    return 3, 10, 60


def estimate_prescription(goal: str | None, difficulty: str | None) -> Prescription:
    """Derive sets/reps/rest from the training goal and exercise difficulty.

    Goal keywords take precedence (strength/power, endurance, hypertrophy/
    muscle/gain); otherwise the exercise difficulty picks the scheme.
    ``estimated_seconds = sets × max(20, round(reps × 3)) + (sets − 1) × rest``.

    Example:
        >>> estimate_prescription("strength", None)
        Prescription(sets=4, reps=5, rest_seconds=120, estimated_seconds=440)
    """
    sets, reps, rest = _base_scheme((goal or "").lower(), (difficulty or "").strip().lower())
    time_per_set = max(PlanLimits.MIN_SECONDS_PER_SET, round(reps * PlanLimits.SECONDS_PER_REP))
    estimated = sets * time_per_set + (sets - 1) * rest
    return Prescription(sets=sets, reps=reps, rest_seconds=rest, estimated_seconds=estimated)


def build_item(exercise: ExerciseRecord, goal: str | None, pool_slot: int | None = None) -> PlanExerciseItem:
    """Create a plan item for ``exercise``.

    An exercise that declares its own ``duration_min`` never gets a shorter
    estimate than that duration. Every item carries a fixed 15 s overhead.
    """
    prescription = estimate_prescription(goal, exercise.difficulty)
    estimated = prescription.estimated_seconds
    if exercise.duration_min is not None and math.isfinite(exercise.duration_min):
        estimated = max(estimated, round(exercise.duration_min * 60))
    estimated += PlanLimits.ITEM_OVERHEAD_SECONDS

    return PlanExerciseItem(
        exercise_id=exercise.id,
        name=exercise.name,
        sets=prescription.sets,
        reps=str(prescription.reps),
        rest_seconds=prescription.rest_seconds,
        estimated_seconds=estimated,
        secondary_muscles=exercise.secondary_muscles or None,
        external_id=exercise.external_id or None,
        pool_slot=pool_slot,
    )


def round_day_minutes(items: Iterable[PlanExerciseItem]) -> int:
    """Total minutes for a day, rounded up to the next multiple of five."""
    total_seconds = sum(item.estimated_seconds or 0 for item in items)
    minutes = math.ceil(total_seconds / 60)
    step = PlanLimits.MINUTE_ROUNDING
    return math.ceil(minutes / step) * step
