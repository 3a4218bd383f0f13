"""Coverage repair passes for weekly plans.

Pass A (core minimum) makes sure Core days hold at least a minimum number of
core exercises. Pass B (required coverage) makes sure every required muscle
token is realized somewhere in the week. Both passes swap exercises with the
remaining pool and never change a day's exercise count; anything swapped out
is handed back to the pool.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Mapping

from app.ml.planning.constants import MuscleTokens, PlanLimits
from app.ml.planning.estimator import build_item, round_day_minutes
from app.ml.planning.pool import ExercisePool
from app.ml.planning.tokens import exercise_token, is_core_exercise
from app.ml.planning.types import DayPlan, ExerciseRecord, PlanExerciseItem

logger = logging.getLogger(__name__)


def item_token(item: PlanExerciseItem, lookup: Mapping[int, ExerciseRecord]) -> str:
    """Canonical token of the catalog exercise behind a plan item."""
    source = lookup.get(item.exercise_id)
    return exercise_token(source) if source is not None else ""


def realized_tokens(days: Iterable[DayPlan], lookup: Mapping[int, ExerciseRecord]) -> Counter[str]:
    """Count how many plan items realize each token across the week."""
    counts: Counter[str] = Counter()
    for day in days:
        for item in day.exercises:
            token = item_token(item, lookup)
            if token:
                counts[token] += 1
    return counts


def missing_required_tokens(days: Iterable[DayPlan], lookup: Mapping[int, ExerciseRecord]) -> list[str]:
    """Required tokens not realized by any item in the week."""
    counts = realized_tokens(days, lookup)
    return [token for token in MuscleTokens.REQUIRED if counts[token] == 0]


def refresh_day(day: DayPlan, lookup: Mapping[int, ExerciseRecord]) -> None:
    """Recompute a day's matched targets and estimated minutes after edits."""
    day.matched_targets = {t for t in (item_token(i, lookup) for i in day.exercises) if t}
    day.estimated_minutes = round_day_minutes(day.exercises)


class CoverageRepairer:
    """Swap-based repair for core minimums and weekly muscle coverage.

    Example:
        >>> repairer = CoverageRepairer()
        >>> repairer.ensure_core_minimum(day, pool, lookup, goal="general")
        1
        >>> repairer.ensure_required_coverage(days, pool, lookup, goal="general")
        []
    """

    def __init__(
        self,
        core_min_exercises: int = PlanLimits.DEFAULT_CORE_MIN_EXERCISES,
        core_max_swaps: int = PlanLimits.DEFAULT_CORE_MAX_SWAPS,
    ) -> None:
        self._core_min = core_min_exercises
        self._core_max_swaps = core_max_swaps

    def ensure_core_minimum(
        self,
        day: DayPlan,
        pool: ExercisePool,
        lookup: Mapping[int, ExerciseRecord],
        goal: str | None,
    ) -> int:
        """Swap core exercises into a Core-focused day until the minimum is met.

        Returns:
            Number of swaps performed.
        """
        if "core" not in (day.focus or "").lower():
            return 0

        def _is_core(item: PlanExerciseItem) -> bool:
            return is_core_exercise(item.name, item_token(item, lookup))

        core_count = sum(1 for item in day.exercises if _is_core(item))
        swaps = 0
        while core_count < self._core_min and swaps < self._core_max_swaps:
            slot = pool.find(
                lambda e: is_core_exercise(e.name, exercise_token(e)),
                exclude_ids=day.exercise_ids,
            )
            if slot is None:
                break
            replace_idx = next(
                (i for i, item in enumerate(day.exercises) if not _is_core(item)),
                None,
            )
            if replace_idx is None:
                break

            self._swap(day, replace_idx, pool, slot, goal)
            core_count += 1
            swaps += 1

        if swaps:
            refresh_day(day, lookup)
            logger.debug(f"Swapped {swaps} core exercises into {day.day}")
        if core_count < self._core_min:
            logger.warning(
                f"{day.day} ({day.focus}) has {core_count} core exercises, "
                f"below the minimum of {self._core_min}"
            )
        return swaps

    def ensure_required_coverage(
        self,
        days: list[DayPlan],
        pool: ExercisePool,
        lookup: Mapping[int, ExerciseRecord],
        goal: str | None,
    ) -> list[str]:
        """Swap in exercises for required tokens missing from the week.

        For each missing token, the first matching exercise in the remaining
        pool replaces an item in the first day that can spare one: an item
        with a different token whose removal keeps every other required
        token covered.

        Returns:
            Required tokens still missing after repair.
        """
        still_missing: list[str] = []
        for token in MuscleTokens.REQUIRED:
            counts = realized_tokens(days, lookup)
            if counts[token] > 0:
                continue

            slot = pool.find(lambda e, t=token: exercise_token(e) == t)
            if slot is None:
                logger.info(f"No remaining exercise covers '{token}'")
                still_missing.append(token)
                continue
            candidate = pool.get(slot)

            placed = False
            for day in days:
                if candidate.id in day.exercise_ids:
                    continue
                replace_idx = self._spare_item_index(day, token, counts, lookup)
                if replace_idx is None:
                    continue
                self._swap(day, replace_idx, pool, slot, goal)
                refresh_day(day, lookup)
                logger.debug(f"Covered '{token}' with exercise {candidate.id} on {day.day}")
                placed = True
                break

            if not placed:
                still_missing.append(token)
        return still_missing

    @staticmethod
    def _spare_item_index(
        day: DayPlan,
        token: str,
        counts: Counter[str],
        lookup: Mapping[int, ExerciseRecord],
    ) -> int | None:
        for idx, item in enumerate(day.exercises):
            item_tok = item_token(item, lookup)
            if item_tok == token:
                continue
            if item_tok in MuscleTokens.REQUIRED and counts[item_tok] <= 1:
                continue
            return idx
        return None

    @staticmethod
    def _swap(day: DayPlan, index: int, pool: ExercisePool, slot: int, goal: str | None) -> None:
        removed = day.exercises[index]
        exercise = pool.take(slot)
        day.exercises[index] = build_item(exercise, goal, pool_slot=slot)
        if removed.pool_slot is not None:
            pool.release(removed.pool_slot)
