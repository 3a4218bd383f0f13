"""Workout suggestion service: loads the catalog and runs the plan engine."""
from __future__ import annotations

from time import perf_counter
from typing import Any, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import Settings, get_settings
from app.core.exceptions import CatalogUnavailableError, ValidationError
from app.core.logging import get_logger
from app.core.metrics import track_plan_generation
from app.ml.planning import (
    ExerciseRecord,
    PlanningException,
    PlanningOptions,
    PlanningProfile,
    PoolEmptyError,
    WorkoutPlanEngine,
)
from app.schemas.workout import WorkoutSuggestRequest

logger = get_logger(__name__)


class CatalogSource(Protocol):
    async def list_catalog(self, limit: int | None = None) -> list[ExerciseRecord]: ...


def parse_targets(value: Any) -> list[str]:
    """Accept a list of strings or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        items: Sequence[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ValidationError("targets", "must be a list of strings or a comma-separated string")
    return [str(item).strip() for item in items if str(item).strip()]


def parse_optional_int(field: str, value: Any) -> int | None:
    """Parse an optional integer override from a query string or body."""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(field, "must be an integer", {"field": field, "value": str(value)})


class WorkoutPlanService:
    def __init__(
        self,
        catalog: CatalogSource,
        engine: WorkoutPlanEngine | None = None,
        settings: Settings | None = None,
    ):
        self._catalog = catalog
        self._engine = engine or WorkoutPlanEngine()
        self._settings = settings or get_settings()

    def build_options(
        self,
        request: WorkoutSuggestRequest,
        max_exercises: Any = None,
        exercises_per_day: Any = None,
        targets: Any = None,
    ) -> PlanningOptions:
        """Merge query overrides, body fields and settings; query wins over body."""
        max_value = parse_optional_int("max_exercises", max_exercises)
        if max_value is None:
            max_value = request.max_exercises
        per_day_value = parse_optional_int("exercises_per_day", exercises_per_day)
        if per_day_value is None:
            per_day_value = request.exercises_per_day
        preferred = parse_targets(targets) if targets not in (None, "") else parse_targets(request.targets)

        return PlanningOptions.from_settings(
            self._settings,
            max_exercises=max_value,
            exercises_per_day=per_day_value,
            preferred_targets=preferred,
        )

    async def load_catalog(self) -> list[ExerciseRecord]:
        try:
            return await self._catalog.list_catalog(limit=self._settings.planner_catalog_limit)
        except SQLAlchemyError as e:
            logger.error("catalog_fetch_failed", error=str(e))
            raise CatalogUnavailableError(details={"reason": type(e).__name__}) from e

    async def suggest_workout(
        self,
        request: WorkoutSuggestRequest,
        max_exercises: Any = None,
        exercises_per_day: Any = None,
        targets: Any = None,
    ) -> dict[str, Any]:
        """Build a weekly plan for the request.

        Returns:
            The plan in its output shape

        Raises:
            ValidationError: A query override is not an integer
            CatalogUnavailableError: The catalog could not be loaded
            PlanningException: The engine could not produce a valid plan
        """
        options = self.build_options(request, max_exercises, exercises_per_day, targets)
        profile = PlanningProfile(
            goal=request.goal,
            days_per_week=request.days_per_week,
            activity_level=request.activity_level,
            height=request.height,
            weight=request.weight,
        )
        catalog = await self.load_catalog()

        logger.info(
            "workout_plan_requested",
            goal=profile.goal,
            days_per_week=profile.day_count,
            catalog_size=len(catalog),
            max_exercises=options.max_exercises,
            exercises_per_day=options.exercises_per_day,
            preferred_targets=list(options.preferred_targets),
        )

        start = perf_counter()
        try:
            plan, validation = self._engine.build_plan(profile, catalog, options)
        except PoolEmptyError as e:
            track_plan_generation("empty_pool", perf_counter() - start)
            logger.warning("workout_plan_empty_pool", message=e.message)
            raise
        except PlanningException as e:
            track_plan_generation("error", perf_counter() - start)
            logger.error("workout_plan_failed", error_type=type(e).__name__, message=e.message, details=e.details)
            raise

        track_plan_generation(
            "success" if validation.passed else "coverage_gap",
            perf_counter() - start,
            validation.missing_tokens,
        )
        logger.info(
            "workout_plan_generated",
            plan_name=plan.plan_name,
            days=len(plan.days),
            missing_tokens=list(validation.missing_tokens),
            warnings=len(plan.warnings),
        )
        return plan.to_dict()
