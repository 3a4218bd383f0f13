"""Tests for domain error handler to verify structured JSON error responses."""
import json
from datetime import datetime

import pytest
from fastapi.responses import JSONResponse

from app.core.error_handlers import domain_error_handler, ERROR_STATUS_MAP
from app.core.exceptions import (
    CatalogUnavailableError,
    DomainError,
    ValidationError,
)


class MockRequest:
    """Mock FastAPI Request object for testing."""

    def __init__(self, request_id: str = "test-request-123"):
        self.state = type('State', (), {'request_id': request_id})()


class TestDomainErrorExceptions:
    """Test domain exception classes and their error codes."""

    def test_domain_error_base(self):
        """Test base DomainError class."""
        error = DomainError(
            code="TEST_001",
            message="Test error message",
            details={"key": "value"}
        )

        assert error.code == "TEST_001"
        assert error.message == "Test error message"
        assert error.details == {"key": "value"}
        assert str(error) == "Test error message"

    def test_validation_error(self):
        """Test ValidationError generates correct error code."""
        error = ValidationError("max_exercises", "must be an integer")

        assert error.code == "VAL_MAX_EXERCISES_001"
        assert error.message == "Validation failed for max_exercises: must be an integer"
        assert error.details == {"field": "max_exercises"}

    def test_validation_error_with_details(self):
        """Test ValidationError with custom details."""
        error = ValidationError(
            "exercises_per_day",
            "must be an integer",
            {"field": "exercises_per_day", "value": "six"}
        )

        assert error.code == "VAL_EXERCISES_PER_DAY_001"
        assert "must be an integer" in error.message
        assert error.details == {"field": "exercises_per_day", "value": "six"}

    def test_catalog_unavailable_default(self):
        """Test CatalogUnavailableError default code and message."""
        error = CatalogUnavailableError()

        assert error.code == "DB_CATALOG_001"
        assert error.message == "Failed to fetch exercises from database"
        assert error.details == {}

    def test_catalog_unavailable_custom(self):
        """Test CatalogUnavailableError with details."""
        error = CatalogUnavailableError(details={"reason": "OperationalError"})

        assert error.code == "DB_CATALOG_001"
        assert error.details == {"reason": "OperationalError"}


class TestErrorStatusMap:
    """Test ERROR_STATUS_MAP mapping."""

    def test_status_map_complete(self):
        """Verify all domain errors have status codes mapped."""
        assert ValidationError in ERROR_STATUS_MAP
        assert CatalogUnavailableError in ERROR_STATUS_MAP

    def test_validation_status(self):
        """Test ValidationError maps to 400."""
        assert ERROR_STATUS_MAP[ValidationError] == 400

    def test_catalog_unavailable_status(self):
        """Test CatalogUnavailableError maps to 503."""
        assert ERROR_STATUS_MAP[CatalogUnavailableError] == 503


class TestDomainErrorHandler:
    """Test domain_error_handler function."""

    @pytest.mark.asyncio
    async def test_validation_error_response(self):
        """Test ValidationError returns 400 with structured JSON."""
        error = ValidationError("targets", "must be a list of strings or a comma-separated string")
        request = MockRequest(request_id="req-456")

        response = await domain_error_handler(request, error)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 400

        data = json.loads(response.body.decode())

        assert data["data"] is None
        assert len(data["errors"]) == 1
        error_dict = data["errors"][0]
        assert error_dict["code"] == "VAL_TARGETS_001"
        assert "comma-separated" in error_dict["message"]
        assert error_dict["details"]["field"] == "targets"

    @pytest.mark.asyncio
    async def test_catalog_unavailable_response(self):
        """Test CatalogUnavailableError returns 503 with structured JSON."""
        error = CatalogUnavailableError(details={"reason": "OperationalError"})
        request = MockRequest(request_id="req-db")

        response = await domain_error_handler(request, error)

        assert response.status_code == 503

        data = json.loads(response.body.decode())

        error_dict = data["errors"][0]
        assert error_dict["code"] == "DB_CATALOG_001"
        assert error_dict["message"] == "Failed to fetch exercises from database"
        assert error_dict["details"] == {"reason": "OperationalError"}

    @pytest.mark.asyncio
    async def test_response_includes_metadata(self):
        """Test error response includes request_id and timestamp."""
        error = ValidationError("field", "Invalid field")
        request = MockRequest(request_id="test-request-id-12345")

        response = await domain_error_handler(request, error)

        data = json.loads(response.body.decode())

        assert data["meta"]["request_id"] == "test-request-id-12345"
        assert data["meta"]["timestamp"].endswith("Z")

        # Verify timestamp is a valid ISO datetime string
        datetime.fromisoformat(data["meta"]["timestamp"].replace('Z', '+00:00'))

    @pytest.mark.asyncio
    async def test_unknown_domain_error_returns_500(self):
        """Test unknown DomainError subclass returns 500."""

        class CustomDomainError(DomainError):
            """Custom domain error not in status map."""
            pass

        error = CustomDomainError("CUSTOM_001", "Custom error message")
        request = MockRequest(request_id="req-custom")

        response = await domain_error_handler(request, error)

        assert response.status_code == 500  # Default for unmapped errors

        data = json.loads(response.body.decode())

        error_dict = data["errors"][0]
        assert error_dict["code"] == "CUSTOM_001"
        assert error_dict["message"] == "Custom error message"
        assert error_dict["details"] == {}

    @pytest.mark.asyncio
    async def test_error_with_none_request_id(self):
        """Test error response when request has no request_id."""
        error = ValidationError("field", "Invalid field")

        # Create a mock request without request_id in state
        request = type('Request', (), {
            'state': type('State', (), {})()
        })()

        response = await domain_error_handler(request, error)

        data = json.loads(response.body.decode())

        # Should handle missing request_id gracefully
        assert data["meta"]["request_id"] is None
