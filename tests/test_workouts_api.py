"""
Tests for the workout suggestion endpoint and supporting service.

The database is replaced by an in-memory catalog source through FastAPI
dependency overrides; the engine uses an identity shuffle so responses are
reproducible.
"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import SQLAlchemyError

from app.api.routes.workouts import get_workout_plan_service
from app.config.settings import Settings
from app.core.exceptions import CatalogUnavailableError, ValidationError
from app.main import app
from app.ml.planning import WorkoutPlanEngine, identity_shuffle
from app.schemas.workout import WorkoutSuggestRequest
from app.services.workout_plan import (
    WorkoutPlanService,
    parse_optional_int,
    parse_targets,
)


class FakeCatalog:
    """Catalog source returning fixed rows or raising a database error."""

    def __init__(self, exercises=None, error: Exception | None = None):
        self.exercises = list(exercises or [])
        self.error = error
        self.limits: list[int | None] = []

    async def list_catalog(self, limit: int | None = None):
        self.limits.append(limit)
        if self.error is not None:
            raise self.error
        return self.exercises if limit is None else self.exercises[:limit]


def make_service(source: FakeCatalog) -> WorkoutPlanService:
    return WorkoutPlanService(
        source,
        engine=WorkoutPlanEngine(shuffle=identity_shuffle),
        settings=Settings(),
    )


@pytest.fixture
def catalog_source(catalog) -> FakeCatalog:
    return FakeCatalog(catalog)


@pytest_asyncio.fixture
async def client(catalog_source):
    """HTTP client against the app with the catalog source overridden."""
    app.dependency_overrides[get_workout_plan_service] = lambda: make_service(catalog_source)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


class TestSuggestWorkout:
    """Test POST /ai/suggest-workout."""

    @pytest.mark.asyncio
    async def test_three_day_plan(self, client):
        response = await client.post("/ai/suggest-workout", json={"goal": "strength", "daysPerWeek": 3})

        assert response.status_code == 200
        workout = response.json()["workout"]
        assert workout["plan_name"] == "3-Day Push/Pull/Legs Program"
        assert len(workout["days"]) == 3
        assert all(len(day["exercises"]) == 6 for day in workout["days"])
        assert "warnings" not in workout

    @pytest.mark.asyncio
    async def test_snake_case_body_fields(self, client):
        response = await client.post("/ai/suggest-workout", json={"goal": "hypertrophy", "days_per_week": 2})

        assert response.status_code == 200
        assert response.json()["workout"]["plan_name"] == "2-Day Upper/Lower Split"

    @pytest.mark.asyncio
    async def test_query_overrides_body(self, client):
        response = await client.post(
            "/ai/suggest-workout",
            params={"exercises_per_day": "4"},
            json={"daysPerWeek": 3, "exercises_per_day": 8},
        )

        assert response.status_code == 200
        assert all(len(day["exercises"]) == 4 for day in response.json()["workout"]["days"])

    @pytest.mark.asyncio
    async def test_body_tuning_used_without_query(self, client):
        response = await client.post("/ai/suggest-workout", json={"daysPerWeek": 2, "exercises_per_day": 5})

        assert response.status_code == 200
        assert all(len(day["exercises"]) == 5 for day in response.json()["workout"]["days"])

    @pytest.mark.asyncio
    async def test_targets_as_query_string(self, client):
        response = await client.post(
            "/ai/suggest-workout",
            params={"targets": "biceps, triceps"},
            json={"daysPerWeek": 5},
        )

        assert response.status_code == 200
        assert len(response.json()["workout"]["days"]) == 5

    @pytest.mark.asyncio
    async def test_catalog_limit_from_settings(self, client, catalog_source):
        await client.post("/ai/suggest-workout", json={"daysPerWeek": 3})

        assert catalog_source.limits == [Settings().planner_catalog_limit]

    @pytest.mark.asyncio
    async def test_non_integer_override_returns_envelope(self, client):
        response = await client.post(
            "/ai/suggest-workout",
            params={"max_exercises": "abc"},
            json={"daysPerWeek": 3},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["data"] is None
        assert body["errors"][0]["code"] == "VAL_MAX_EXERCISES_001"
        assert body["meta"]["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_days_out_of_range_rejected(self, client):
        response = await client.post("/ai/suggest-workout", json={"daysPerWeek": 0})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        response = await client.post(
            "/ai/suggest-workout",
            json={"daysPerWeek": 3},
            headers={"X-Request-ID": "req-abc-123"},
        )

        assert response.headers["X-Request-ID"] == "req-abc-123"


class TestSuggestWorkoutErrors:
    """Test error responses keep the {"error": message} shape."""

    @pytest.mark.asyncio
    async def test_empty_catalog_returns_400(self, client, catalog_source):
        catalog_source.exercises = []

        response = await client.post("/ai/suggest-workout", json={"daysPerWeek": 3})

        assert response.status_code == 400
        assert response.json() == {"error": "No exercises available to build a plan"}

    @pytest.mark.asyncio
    async def test_database_failure_returns_500(self, client, catalog_source):
        catalog_source.error = SQLAlchemyError("connection refused")

        response = await client.post("/ai/suggest-workout", json={"daysPerWeek": 3})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch exercises from database"}

    @pytest.mark.asyncio
    async def test_unbuildable_plan_returns_500(self, client, catalog_source):
        catalog_source.exercises = catalog_source.exercises[:3]

        response = await client.post(
            "/ai/suggest-workout",
            params={"exercises_per_day": "4"},
            json={"daysPerWeek": 3},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Each day must have between 4 and 8 exercises"}


class TestMonitoringEndpoints:
    """Test health and metrics endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_metrics_include_planner_series(self, client):
        await client.post("/ai/suggest-workout", json={"daysPerWeek": 3})

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "workout_plans_generated_total" in response.text
        assert "http_requests_total" in response.text


class TestServiceHelpers:
    """Test request parsing helpers."""

    def test_parse_targets_from_string(self):
        assert parse_targets("chest, lats,,") == ["chest", "lats"]

    def test_parse_targets_from_list(self):
        assert parse_targets([" biceps ", ""]) == ["biceps"]

    def test_parse_targets_none(self):
        assert parse_targets(None) == []

    def test_parse_targets_rejects_other_types(self):
        with pytest.raises(ValidationError):
            parse_targets(42)

    def test_parse_optional_int(self):
        assert parse_optional_int("max_exercises", "12") == 12
        assert parse_optional_int("max_exercises", None) is None
        assert parse_optional_int("max_exercises", "") is None

    def test_parse_optional_int_rejects_text(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_optional_int("exercises_per_day", "six")
        assert exc_info.value.code == "VAL_EXERCISES_PER_DAY_001"

    def test_build_options_clamps_and_prefers_query(self, catalog):
        service = make_service(FakeCatalog(catalog))
        request = WorkoutSuggestRequest(max_exercises=50, exercises_per_day=12, targets=["Chest"])

        options = service.build_options(request, max_exercises="200", targets="lats")

        assert options.max_exercises == 100
        assert options.exercises_per_day == 8
        assert options.preferred_targets == ("lats",)

    @pytest.mark.asyncio
    async def test_load_catalog_wraps_database_errors(self):
        service = make_service(FakeCatalog(error=SQLAlchemyError("boom")))

        with pytest.raises(CatalogUnavailableError) as exc_info:
            await service.load_catalog()
        assert exc_info.value.details == {"reason": "SQLAlchemyError"}
