"""API routes for workout suggestions."""
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import CatalogUnavailableError
from app.core.logging import get_logger
from app.db.database import get_db
from app.ml.planning import PlanningException, PoolEmptyError
from app.repositories.exercise_repository import ExerciseRepository
from app.schemas.workout import ErrorResponse, WorkoutSuggestRequest, WorkoutSuggestResponse
from app.services.workout_plan import WorkoutPlanService

router = APIRouter()
logger = get_logger(__name__)


def get_workout_plan_service(db: AsyncSession = Depends(get_db)) -> WorkoutPlanService:
    return WorkoutPlanService(ExerciseRepository(db))


@router.post(
    "/suggest-workout",
    responses={
        200: {"model": WorkoutSuggestResponse},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def suggest_workout(
    request: WorkoutSuggestRequest,
    max_exercises: str | None = Query(default=None),
    exercises_per_day: str | None = Query(default=None),
    targets: str | None = Query(default=None),
    service: WorkoutPlanService = Depends(get_workout_plan_service),
):
    """
    Suggest a weekly workout plan.

    Query parameters override the matching body fields. Planning failures
    return `{"error": message}`: 400 when no exercises are available, 500
    otherwise.
    """
    try:
        plan = await service.suggest_workout(
            request,
            max_exercises=max_exercises,
            exercises_per_day=exercises_per_day,
            targets=targets,
        )
    except CatalogUnavailableError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": e.message},
        )
    except PoolEmptyError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": e.message})
    except PlanningException as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": e.message},
        )

    return {"workout": plan}
