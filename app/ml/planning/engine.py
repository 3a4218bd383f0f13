"""Weekly workout-plan synthesis engine.

Orchestrates the full pipeline for one planning run:

    catalog → PoolSampler → DayAllocator (+ core minimum repair per day)
            → required coverage repair → focus resolution → PlanName
            → PlanValidator → plan dict or ``{"error": ...}``

All state lives in locals of a single call, so one engine instance can
serve any number of runs. Randomness is limited to the injected shuffle.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Sequence

from app.ml.planning.allocator import DayAllocator
from app.ml.planning.constants import Focus
from app.ml.planning.coverage import CoverageRepairer
from app.ml.planning.exceptions import PlanningException, PoolEmptyError
from app.ml.planning.focus import planned_focuses, resolve_focus
from app.ml.planning.naming import build_plan_name
from app.ml.planning.pool import ExercisePool, PoolSampler, Shuffle
from app.ml.planning.types import (
    ExerciseRecord,
    PlanningOptions,
    PlanningProfile,
    WorkoutPlan,
)
from app.ml.planning.validator import PlanValidationResult, PlanValidator

logger = logging.getLogger(__name__)


class WorkoutPlanEngine:
    """Deterministic weekly plan builder.

    Components default to fresh instances configured from the run's
    options; pass explicit ones to override a stage.

    Example:
        >>> engine = WorkoutPlanEngine(shuffle=random.Random(7).shuffle)
        >>> profile = PlanningProfile(goal="strength", days_per_week=3)
        >>> result = engine.generate(profile, catalog)
        >>> result["plan_name"]
        '3-Day Push/Pull/Legs Program'
    """

    def __init__(
        self,
        options: PlanningOptions | None = None,
        shuffle: Shuffle | None = None,
        sampler: PoolSampler | None = None,
        allocator: DayAllocator | None = None,
        repairer: CoverageRepairer | None = None,
        validator: PlanValidator | None = None,
    ) -> None:
        self._options = (options or PlanningOptions()).normalized()
        self._sampler = sampler or PoolSampler(shuffle=shuffle)
        self._allocator = allocator
        self._repairer = repairer
        self._validator = validator

    def generate(
        self,
        profile: PlanningProfile,
        catalog: Sequence[ExerciseRecord],
        options: PlanningOptions | None = None,
    ) -> dict[str, Any]:
        """Build a plan and return it in the output contract shape.

        Planning failures come back as ``{"error": message}``; they are
        never raised to the caller.
        """
        try:
            plan, _ = self.build_plan(profile, catalog, options)
        except PlanningException as e:
            logger.warning(f"Plan generation failed: {e.message} {e.details}")
            return {"error": e.message}
        return plan.to_dict()

    def build_plan(
        self,
        profile: PlanningProfile,
        catalog: Sequence[ExerciseRecord],
        options: PlanningOptions | None = None,
    ) -> tuple[WorkoutPlan, PlanValidationResult]:
        """Build and validate a weekly plan.

        Returns:
            The plan and the validator's coverage report.

        Raises:
            PlanningException: For any fatal planning error.
        """
        opts = options.normalized() if options is not None else self._options
        days_per_week = profile.day_count
        goal = profile.goal

        if not catalog:
            raise PoolEmptyError()

        focuses = planned_focuses(days_per_week)
        selected = self._sampler.sample(catalog, focuses, opts)
        if not selected:
            raise PoolEmptyError()

        total_needed = opts.exercises_per_day * days_per_week
        pool = ExercisePool(self._sampler.build_rotation(selected, total_needed))
        lookup = {exercise.id: exercise for exercise in selected}

        allocator = self._allocator or DayAllocator(max_iterations=opts.fill_max_iterations)
        repairer = self._repairer or CoverageRepairer(
            core_min_exercises=opts.core_min_exercises,
            core_max_swaps=opts.core_max_swaps,
        )
        validator = self._validator or PlanValidator(repairer=repairer)

        logger.info(
            f"Building {days_per_week}-day plan: goal={goal!r}, pool={len(selected)}, "
            f"slots={pool.capacity}, exercises_per_day={opts.exercises_per_day}"
        )

        plan = WorkoutPlan(plan_name="")
        if len(lookup) < opts.exercises_per_day:
            plan.add_warning(
                f"Only {len(lookup)} distinct exercises available; days hold fewer than "
                f"the requested {opts.exercises_per_day}"
            )

        for index, focus in enumerate(focuses):
            allocation = allocator.allocate_day(index, focus, pool, goal, opts.exercises_per_day)
            if allocation.safety_bound_hit:
                plan.add_warning(f"{allocation.day.day} stopped filling at the iteration limit")
            repairer.ensure_core_minimum(allocation.day, pool, lookup, goal)
            plan.days.append(allocation.day)

        repairer.ensure_required_coverage(plan.days, pool, lookup, goal)

        for day in plan.days:
            if days_per_week == 1:
                day.focus = Focus.FULL_BODY.value
            else:
                day.focus = resolve_focus(day.focus, [lookup[i] for i in day.exercise_ids if i in lookup])

        plan.plan_name = build_plan_name(days_per_week, goal, [day.focus for day in plan.days])
        self._note_repeats(plan)

        validation = validator.validate(plan, selected, days_per_week, remaining=pool, goal=goal)
        logger.info(
            f"Built plan '{plan.plan_name}': covered={list(validation.covered_tokens)}, "
            f"missing={list(validation.missing_tokens)}"
        )
        return plan, validation

    @staticmethod
    def _note_repeats(plan: WorkoutPlan) -> None:
        days_by_id: dict[int, list[str]] = defaultdict(list)
        for day in plan.days:
            for exercise_id in day.exercise_ids:
                days_by_id[exercise_id].append(day.day)
        repeated = sorted(eid for eid, days in days_by_id.items() if len(days) > 1)
        if repeated:
            plan.add_warning(
                f"Exercises repeated across days because the pool is small: {repeated}"
            )
