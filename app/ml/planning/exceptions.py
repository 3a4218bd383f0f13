"""Exception hierarchy for the workout-plan engine.

Exception Hierarchy:
- PlanningException (base)
  - PoolEmptyError (no exercises available; fatal)
  - PlanStructureError (structural contract broken; fatal, never repaired)
    - DayCountMismatchError
    - PerDayBoundError
  - PoolMembershipError (unknown exercise id left after one substitution)
  - CoverageGapError (required tokens still missing after repair)

Fatal errors propagate inside the engine and are converted to an
``{"error": message}`` object by ``WorkoutPlanEngine.generate``. A coverage
gap is downgraded to a plan warning by the validator; the error type exists
so callers running the validator in strict mode can raise it.

Example:
    try:
        result = validator.validate(plan, pool, days_per_week=3)
    except PlanStructureError as e:
        logger.error(f"Plan structure invalid: {e}")
    except PlanningException as e:
        logger.error(f"Planning failed: {e}")
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================

class PlanningException(Exception):
    """Base exception for all planning errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with additional error context
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Pool Exceptions
# =============================================================================

class PoolEmptyError(PlanningException):
    """Raised when no exercises are available to build a plan."""

    def __init__(self, message: str = "No exercises available to build a plan", details: dict | None = None) -> None:
        super().__init__(message, details)


class PoolMembershipError(PlanningException):
    """Raised when a plan references an exercise outside the supplied pool.

    The validator attempts one focus-matching substitution before raising.
    """

    pass


# =============================================================================
# Structure Exceptions
# =============================================================================

class PlanStructureError(PlanningException):
    """Base class for structural violations that are never repaired."""

    pass


class DayCountMismatchError(PlanStructureError):
    """Raised when the plan does not contain exactly the requested number of days."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Plan must contain exactly {expected} days",
            details={"expected": expected, "actual": actual},
        )


class PerDayBoundError(PlanStructureError):
    """Raised when a day falls outside the per-day exercise bounds."""

    def __init__(self, day: str, count: int, minimum: int, maximum: int) -> None:
        super().__init__(
            f"Each day must have between {minimum} and {maximum} exercises",
            details={"day": day, "count": count, "min": minimum, "max": maximum},
        )


# =============================================================================
# Coverage Exceptions
# =============================================================================

class CoverageGapError(PlanningException):
    """Raised in strict validation when required muscle tokens stay uncovered."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Weekly plan does not cover: {', '.join(missing)}",
            details={"missing": list(missing)},
        )
        self.missing = list(missing)
