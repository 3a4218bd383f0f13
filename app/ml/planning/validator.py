"""Final validation and bounded repair for weekly plans.

Checks run in order:
1. Day count equals the requested days per week (fatal)
2. Every day holds between 4 and 8 exercises (fatal)
3. Every exercise id belongs to the supplied pool (one substitution, else fatal)
4. Required muscle tokens are covered across the week (one repair pass,
   else a warning on the plan)

The validator works on any ``WorkoutPlan``, including plans that did not
come from the allocator, so it only relies on the supplied pool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from app.ml.planning.constants import PlanLimits
from app.ml.planning.coverage import (
    CoverageRepairer,
    missing_required_tokens,
    realized_tokens,
    refresh_day,
)
from app.ml.planning.estimator import build_item
from app.ml.planning.exceptions import (
    CoverageGapError,
    DayCountMismatchError,
    PerDayBoundError,
    PoolMembershipError,
)
from app.ml.planning.matchers import FocusMatcher, KeywordMatcher
from app.ml.planning.pool import ExercisePool
from app.ml.planning.types import ExerciseRecord, WorkoutPlan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanValidationResult:
    """Outcome of validating a plan that passed every fatal check.

    Attributes:
        passed: True when no coverage gap remains
        message: Human-readable summary
        covered_tokens: Canonical tokens realized across the week
        missing_tokens: Required tokens still missing after repair
        substitutions: Number of out-of-pool exercises replaced
    """

    passed: bool
    message: str
    covered_tokens: tuple[str, ...]
    missing_tokens: tuple[str, ...]
    substitutions: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "passed": self.passed,
            "message": self.message,
            "covered_tokens": list(self.covered_tokens),
            "missing_tokens": list(self.missing_tokens),
            "substitutions": self.substitutions,
        }


class PlanValidator:
    """Validator enforcing plan structure, pool membership and coverage.

    Example:
        >>> validator = PlanValidator()
        >>> result = validator.validate(plan, pool, days_per_week=3)
        >>> result.passed
        True
    """

    def __init__(
        self,
        repairer: CoverageRepairer | None = None,
        focus_matcher: FocusMatcher | None = None,
        strict_coverage: bool = False,
    ) -> None:
        self._repairer = repairer or CoverageRepairer()
        self._focus_matcher = focus_matcher or KeywordMatcher()
        self._strict_coverage = strict_coverage

    def validate(
        self,
        plan: WorkoutPlan,
        pool: Sequence[ExerciseRecord],
        days_per_week: int,
        remaining: ExercisePool | None = None,
        goal: str | None = None,
    ) -> PlanValidationResult:
        """Validate ``plan`` against ``pool``, repairing where allowed.

        Args:
            plan: Plan to validate; repaired in place.
            pool: The exercises the plan was allowed to use.
            days_per_week: Requested number of days.
            remaining: Unassigned slots to draw coverage repairs from. When
                omitted, pool exercises not used by the plan are used.
            goal: Training goal used to prescribe substituted exercises.

        Raises:
            DayCountMismatchError: Day count differs from ``days_per_week``.
            PerDayBoundError: A day holds fewer than 4 or more than 8 exercises.
            PoolMembershipError: An unknown exercise could not be substituted.
            CoverageGapError: Only when constructed with ``strict_coverage``.
        """
        expected = max(1, int(days_per_week))
        if len(plan.days) != expected:
            raise DayCountMismatchError(expected, len(plan.days))

        for day in plan.days:
            count = len(day.exercises)
            if count < PlanLimits.MIN_EXERCISES_PER_DAY or count > PlanLimits.MAX_EXERCISES_PER_DAY:
                raise PerDayBoundError(
                    day.day,
                    count,
                    PlanLimits.MIN_EXERCISES_PER_DAY,
                    PlanLimits.MAX_EXERCISES_PER_DAY,
                )

        lookup = {exercise.id: exercise for exercise in pool}
        substitutions = self._enforce_membership(plan, pool, lookup, goal)

        missing = missing_required_tokens(plan.days, lookup)
        if missing:
            if remaining is None:
                used = {item.exercise_id for day in plan.days for item in day.exercises}
                remaining = ExercisePool(e for e in pool if e.id not in used)
            logger.info(f"Coverage gaps before repair: {missing}")
            self._repairer.ensure_required_coverage(plan.days, remaining, lookup, goal)
            missing = missing_required_tokens(plan.days, lookup)

        covered = tuple(sorted(realized_tokens(plan.days, lookup)))
        if missing:
            message = f"Weekly plan does not cover: {', '.join(missing)}"
            logger.warning(message)
            if self._strict_coverage:
                raise CoverageGapError(missing)
            plan.add_warning(message)
            return PlanValidationResult(
                passed=False,
                message=message,
                covered_tokens=covered,
                missing_tokens=tuple(missing),
                substitutions=substitutions,
            )

        return PlanValidationResult(
            passed=True,
            message="Plan passed validation with full required coverage",
            covered_tokens=covered,
            missing_tokens=(),
            substitutions=substitutions,
        )

    def _enforce_membership(
        self,
        plan: WorkoutPlan,
        pool: Sequence[ExerciseRecord],
        lookup: dict[int, ExerciseRecord],
        goal: str | None,
    ) -> int:
        substitutions = 0
        used_substitutes: set[int] = set()
        for day in plan.days:
            for index, item in enumerate(day.exercises):
                if item.exercise_id in lookup:
                    continue
                day_ids = set(day.exercise_ids)
                candidate = next(
                    (
                        e
                        for e in pool
                        if e.id not in used_substitutes
                        and e.id not in day_ids
                        and self._focus_matcher.matches(e, day.focus)
                    ),
                    None,
                )
                if candidate is None:
                    raise PoolMembershipError(
                        f"Exercise id {item.exercise_id} not available in provided pool",
                        details={"exercise_id": item.exercise_id, "day": day.day},
                    )
                logger.info(
                    f"Replaced out-of-pool exercise {item.exercise_id} with {candidate.id} on {day.day}"
                )
                used_substitutes.add(candidate.id)
                day.exercises[index] = build_item(candidate, goal)
                substitutions += 1
            if substitutions:
                refresh_day(day, lookup)
        return substitutions
