"""Pydantic schemas for the workout suggestion endpoint."""
from pydantic import BaseModel, ConfigDict, Field


class WorkoutSuggestRequest(BaseModel):
    """Profile and tuning fields accepted by POST /ai/suggest-workout."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    goal: str | None = None
    activity_level: str | None = Field(default=None, alias="activityLevel")
    days_per_week: int = Field(default=3, ge=1, le=14, alias="daysPerWeek")
    height: float | None = None
    weight: float | None = None
    max_exercises: int | None = None
    exercises_per_day: int | None = None
    targets: list[str] | str | None = None


class PlanExerciseResponse(BaseModel):
    exercise_id: int
    name: str
    sets: int
    reps: str | int
    rest_seconds: int
    estimated_seconds: int
    secondary_muscles: str | None = None
    external_id: str | None = None


class DayPlanResponse(BaseModel):
    day: str
    focus: str
    exercises: list[PlanExerciseResponse]
    estimated_minutes: int
    matched_targets: list[str] = Field(default_factory=list)


class WorkoutPlanResponse(BaseModel):
    plan_name: str
    days: list[DayPlanResponse]
    warnings: list[str] | None = None


class WorkoutSuggestResponse(BaseModel):
    workout: WorkoutPlanResponse


class ErrorResponse(BaseModel):
    error: str
