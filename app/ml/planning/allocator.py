"""Per-day exercise allocation over the shared remaining pool.

Each day walks a fixed sequence of states until it holds
``exercises_per_day`` items or the pool runs dry:

1. Match tiers (exact target, then keyword), scanning the pool from the end
2. Loose matches, with strong mismatches pushed to the back of the queue
3. Arbitrary fill from whatever is left

Assigned slots are taken out of the shared ``ExercisePool`` so later days
cannot reuse them. No exercise id appears twice on the same day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from app.ml.planning.constants import PlanLimits
from app.ml.planning.estimator import build_item, round_day_minutes
from app.ml.planning.matchers import (
    DEFAULT_MATCH_TIERS,
    AnyMatcher,
    FocusMatcher,
    LooseMatcher,
    is_strong_mismatch,
)
from app.ml.planning.pool import ExercisePool
from app.ml.planning.tokens import exercise_token
from app.ml.planning.types import DayPlan

logger = logging.getLogger(__name__)


@dataclass
class DayAllocation:
    """Result of allocating one day.

    Attributes:
        day: The filled day
        tier_counts: Number of exercises assigned by each tier name
        safety_bound_hit: True when the fill loop stopped on its iteration bound
    """

    day: DayPlan
    tier_counts: dict[str, int]
    safety_bound_hit: bool = False


class DayAllocator:
    """Fills one day at a time from a shared ``ExercisePool``.

    Example:
        >>> allocator = DayAllocator()
        >>> pool = ExercisePool(exercises)
        >>> result = allocator.allocate_day(0, "Legs", pool, goal="strength", exercises_per_day=6)
        >>> len(result.day.exercises)
        6
    """

    def __init__(
        self,
        tiers: Sequence[FocusMatcher] = DEFAULT_MATCH_TIERS,
        loose_matcher: FocusMatcher | None = None,
        max_iterations: int = PlanLimits.DEFAULT_FILL_MAX_ITERATIONS,
    ) -> None:
        self._tiers = tuple(tiers)
        self._loose = loose_matcher or LooseMatcher()
        self._any = AnyMatcher()
        # Upper bound on fill-loop iterations per day; hitting it is reported.
        self._max_iterations = max(1, max_iterations)

    def allocate_day(
        self,
        index: int,
        focus: str,
        pool: ExercisePool,
        goal: str | None,
        exercises_per_day: int,
    ) -> DayAllocation:
        """Allocate exercises for day ``index`` with the given focus."""
        day = DayPlan(day=f"Day {index + 1}", focus=focus)
        seen: set[int] = set()
        tier_counts: dict[str, int] = {}

        for matcher in self._tiers:
            if len(day.exercises) >= exercises_per_day:
                break
            for slot in pool.available_slots(reverse=True):
                if len(day.exercises) >= exercises_per_day:
                    break
                exercise = pool.get(slot)
                if exercise.id in seen:
                    continue
                if matcher.matches(exercise, focus):
                    self._assign(day, pool, slot, goal, seen)
                    tier_counts[matcher.name] = tier_counts.get(matcher.name, 0) + 1

        safety_bound_hit = self._fill(day, pool, goal, exercises_per_day, seen, tier_counts)

        day.estimated_minutes = round_day_minutes(day.exercises)
        logger.debug(
            f"Allocated {day.day} ({focus}): {len(day.exercises)}/{exercises_per_day} exercises, "
            f"tiers={tier_counts}, {len(pool)} slots left"
        )
        return DayAllocation(day=day, tier_counts=tier_counts, safety_bound_hit=safety_bound_hit)

    def _fill(
        self,
        day: DayPlan,
        pool: ExercisePool,
        goal: str | None,
        exercises_per_day: int,
        seen: set[int],
        tier_counts: dict[str, int],
    ) -> bool:
        """Loose-match then arbitrary fill; returns True if the iteration bound was hit."""
        deferred: set[int] = set()
        iterations = 0

        while len(day.exercises) < exercises_per_day:
            if iterations >= self._max_iterations:
                logger.warning(
                    f"Fill loop for {day.day} stopped after {iterations} iterations "
                    f"with {len(day.exercises)}/{exercises_per_day} exercises"
                )
                return True
            iterations += 1

            candidates = [s for s in pool.available_slots() if pool.get(s).id not in seen]
            if not candidates:
                break
            fresh = [s for s in candidates if s not in deferred]

            slot = next((s for s in fresh if self._loose.matches(pool.get(s), day.focus)), None)
            tier = self._loose.name
            if slot is None and fresh:
                slot, tier = fresh[0], self._any.name
            if slot is None:
                # Only deferred mismatches remain; accept one.
                slot, tier = candidates[0], self._any.name
            elif is_strong_mismatch(pool.get(slot), day.focus):
                token = exercise_token(pool.get(slot))
                if any(s != slot and exercise_token(pool.get(s)) != token for s in fresh):
                    deferred.add(slot)
                    continue

            self._assign(day, pool, slot, goal, seen)
            tier_counts[tier] = tier_counts.get(tier, 0) + 1

        return False

    @staticmethod
    def _assign(day: DayPlan, pool: ExercisePool, slot: int, goal: str | None, seen: set[int]) -> None:
        exercise = pool.take(slot)
        day.exercises.append(build_item(exercise, goal, pool_slot=slot))
        seen.add(exercise.id)
        token = exercise_token(exercise)
        if token:
            day.matched_targets.add(token)
