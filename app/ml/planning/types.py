"""Data types for the workout-plan engine.

Shared type definitions used across the pool sampler, day allocator,
coverage repairer and validator. Exercise records are read-only inputs; the
plan types are built fresh per request.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

from app.ml.planning.constants import PlanLimits

if TYPE_CHECKING:
    from app.config.settings import Settings


@dataclass(frozen=True)
class ExerciseRecord:
    """Catalog exercise as seen by the planner (immutable during a run)."""

    id: int
    name: str
    muscle_group: str | None = None
    target: str | None = None
    secondary_muscles: str | None = None
    equipment: str | None = None
    difficulty: str | None = None
    duration_min: float | None = None
    external_id: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExerciseRecord":
        """Build a record from a dict such as a JSON row or ORM attribute map."""
        duration = data.get("duration_min")
        try:
            duration = float(duration) if duration not in (None, "") else None
        except (TypeError, ValueError):
            duration = None
        if duration is not None and not math.isfinite(duration):
            duration = None
        external_id = data.get("external_id")
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            muscle_group=data.get("muscle_group"),
            target=data.get("target"),
            secondary_muscles=data.get("secondary_muscles"),
            equipment=data.get("equipment"),
            difficulty=data.get("difficulty"),
            duration_min=duration,
            external_id=str(external_id) if external_id not in (None, "") else None,
        )


@dataclass
class PlanExerciseItem:
    """One prescribed exercise inside a day.

    ``pool_slot`` remembers the arena slot the item was taken from so a
    repair swap can hand the slot back; it is not part of the output.
    """

    exercise_id: int
    name: str
    sets: int
    reps: str | int
    rest_seconds: int
    estimated_seconds: int
    secondary_muscles: str | None = None
    external_id: str | None = None
    pool_slot: int | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the output contract shape."""
        return {
            "exercise_id": self.exercise_id,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "rest_seconds": self.rest_seconds,
            "estimated_seconds": self.estimated_seconds,
            "secondary_muscles": self.secondary_muscles,
            "external_id": self.external_id,
        }


@dataclass
class DayPlan:
    """A single training day.

    Attributes:
        day: Ordinal label, e.g. ``"Day 1"``
        focus: Focus label the day was planned or resolved to
        exercises: Ordered exercise items
        estimated_minutes: Duration rounded up to the next 5 minutes
        matched_targets: Canonical tokens realized on the day (informational)
    """

    day: str
    focus: str
    exercises: list[PlanExerciseItem] = field(default_factory=list)
    estimated_minutes: int = 0
    matched_targets: set[str] = field(default_factory=set)

    @property
    def exercise_ids(self) -> list[int]:
        return [item.exercise_id for item in self.exercises]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the output contract shape."""
        return {
            "day": self.day,
            "focus": self.focus,
            "exercises": [item.to_dict() for item in self.exercises],
            "estimated_minutes": self.estimated_minutes,
            "matched_targets": sorted(self.matched_targets),
        }


@dataclass
class WorkoutPlan:
    """A full weekly plan plus any non-fatal warnings."""

    plan_name: str
    days: list[DayPlan] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_warning(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the output contract shape.

        ``warnings`` is only included when there is something to report.
        """
        result: dict[str, Any] = {
            "plan_name": self.plan_name,
            "days": [day.to_dict() for day in self.days],
        }
        if self.warnings:
            result["warnings"] = list(self.warnings)
        return result


@dataclass(frozen=True)
class PlanningProfile:
    """User profile fields the engine consumes."""

    goal: str | None = None
    days_per_week: int = 1
    activity_level: str | None = None
    height: float | None = None
    weight: float | None = None

    @property
    def day_count(self) -> int:
        """Days per week coerced to at least one."""
        try:
            return max(1, int(self.days_per_week))
        except (TypeError, ValueError):
            return 1


@dataclass(frozen=True)
class PlanningOptions:
    """Tuning knobs for a planning run.

    ``max_exercises`` and ``exercises_per_day`` are clamped on construction
    through ``normalized()``; build instances with ``from_settings`` or call
    ``normalized()`` on hand-made ones.
    """

    max_exercises: int = PlanLimits.DEFAULT_POOL_SIZE
    exercises_per_day: int = PlanLimits.DEFAULT_EXERCISES_PER_DAY
    preferred_targets: tuple[str, ...] = ()
    preferred_share: float = PlanLimits.DEFAULT_PREFERRED_SHARE
    sample_per_token_cap: int = PlanLimits.DEFAULT_SAMPLE_PER_TOKEN_CAP
    fill_max_iterations: int = PlanLimits.DEFAULT_FILL_MAX_ITERATIONS
    core_min_exercises: int = PlanLimits.DEFAULT_CORE_MIN_EXERCISES
    core_max_swaps: int = PlanLimits.DEFAULT_CORE_MAX_SWAPS

    def normalized(self) -> "PlanningOptions":
        """Return a copy with sizes clamped and preferred targets cleaned."""
        return PlanningOptions(
            max_exercises=PlanLimits.clamp(
                int(self.max_exercises), PlanLimits.MIN_POOL_SIZE, PlanLimits.MAX_POOL_SIZE
            ),
            exercises_per_day=PlanLimits.clamp(
                int(self.exercises_per_day),
                PlanLimits.MIN_EXERCISES_PER_DAY,
                PlanLimits.MAX_EXERCISES_PER_DAY,
            ),
            preferred_targets=tuple(
                t.strip().lower() for t in self.preferred_targets if t and t.strip()
            ),
            preferred_share=min(1.0, max(0.0, float(self.preferred_share))),
            sample_per_token_cap=max(1, int(self.sample_per_token_cap)),
            fill_max_iterations=max(1, int(self.fill_max_iterations)),
            core_min_exercises=max(0, int(self.core_min_exercises)),
            core_max_swaps=max(0, int(self.core_max_swaps)),
        )

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        max_exercises: int | None = None,
        exercises_per_day: int | None = None,
        preferred_targets: list[str] | tuple[str, ...] | None = None,
    ) -> "PlanningOptions":
        """Build options from application settings plus per-request overrides."""
        return cls(
            max_exercises=max_exercises if max_exercises is not None else settings.planner_max_exercises,
            exercises_per_day=(
                exercises_per_day
                if exercises_per_day is not None
                else settings.planner_exercises_per_day
            ),
            preferred_targets=tuple(preferred_targets or ()),
            preferred_share=settings.planner_preferred_share,
            sample_per_token_cap=settings.planner_sample_per_token_cap,
            fill_max_iterations=settings.planner_fill_max_iterations,
            core_min_exercises=settings.planner_core_min_exercises,
            core_max_swaps=settings.planner_core_max_swaps,
        ).normalized()
