"""Weekly workout-plan synthesis package.

This package turns a training profile and an exercise catalog into a
multi-day plan with day focuses, per-exercise prescriptions, a plan name
and muscle coverage guarantees.

Main exports:
    - WorkoutPlanEngine: Orchestrates sampling, allocation, repair and validation
    - PoolSampler: Builds the bounded candidate pool from a catalog
    - ExercisePool: Slot arena the days draw exercises from
    - DayAllocator: Fills one day from the shared pool
    - CoverageRepairer: Core minimum and required coverage repair passes
    - PlanValidator: Structural checks and bounded repair
    - ExerciseRecord, PlanningProfile, PlanningOptions: Engine inputs
    - WorkoutPlan, DayPlan, PlanExerciseItem: Engine output
"""
from .allocator import DayAllocation, DayAllocator
from .constants import FOCUS_SPLITS, Focus, FocusTables, MuscleTokens, PlanLimits
from .coverage import CoverageRepairer, missing_required_tokens, realized_tokens
from .engine import WorkoutPlanEngine
from .estimator import Prescription, build_item, estimate_prescription, round_day_minutes
from .exceptions import (
    CoverageGapError,
    DayCountMismatchError,
    PerDayBoundError,
    PlanningException,
    PlanStructureError,
    PoolEmptyError,
    PoolMembershipError,
)
from .focus import planned_focuses, resolve_focus
from .matchers import (
    DEFAULT_MATCH_TIERS,
    ExactTargetMatcher,
    FocusMatcher,
    KeywordMatcher,
    LooseMatcher,
    is_strong_mismatch,
)
from .naming import build_plan_name
from .pool import ExercisePool, PoolSampler, identity_shuffle
from .tokens import (
    exercise_token,
    focus_target_tokens,
    is_core_exercise,
    normalize_token,
    tokens_needed_for,
)
from .types import (
    DayPlan,
    ExerciseRecord,
    PlanExerciseItem,
    PlanningOptions,
    PlanningProfile,
    WorkoutPlan,
)
from .validator import PlanValidationResult, PlanValidator

__all__ = [
    # Engine
    "WorkoutPlanEngine",
    # Stages
    "PoolSampler",
    "ExercisePool",
    "identity_shuffle",
    "DayAllocator",
    "DayAllocation",
    "CoverageRepairer",
    "PlanValidator",
    "PlanValidationResult",
    # Matching
    "FocusMatcher",
    "ExactTargetMatcher",
    "KeywordMatcher",
    "LooseMatcher",
    "DEFAULT_MATCH_TIERS",
    "is_strong_mismatch",
    # Helpers
    "planned_focuses",
    "resolve_focus",
    "build_plan_name",
    "normalize_token",
    "exercise_token",
    "focus_target_tokens",
    "tokens_needed_for",
    "is_core_exercise",
    "missing_required_tokens",
    "realized_tokens",
    "Prescription",
    "estimate_prescription",
    "build_item",
    "round_day_minutes",
    # Constants
    "Focus",
    "FOCUS_SPLITS",
    "FocusTables",
    "MuscleTokens",
    "PlanLimits",
    # Types
    "ExerciseRecord",
    "PlanExerciseItem",
    "DayPlan",
    "WorkoutPlan",
    "PlanningProfile",
    "PlanningOptions",
    # Exceptions
    "PlanningException",
    "PoolEmptyError",
    "PoolMembershipError",
    "PlanStructureError",
    "DayCountMismatchError",
    "PerDayBoundError",
    "CoverageGapError",
]
