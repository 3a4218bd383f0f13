from datetime import datetime, timezone

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.core.exceptions import CatalogUnavailableError, DomainError, ValidationError
from app.core.logging import get_logger


logger = get_logger(__name__)


ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    CatalogUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = ERROR_STATUS_MAP.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    request_id = getattr(request.state, "request_id", None)

    logger.warning(
        "domain_error",
        code=exc.code,
        status_code=status_code,
        request_id=request_id,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "data": None,
            "meta": {
                "request_id": request_id,
                "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            },
            "errors": [
                {
                    "code": exc.code,
                    "message": exc.message,
                    "details": exc.details,
                }
            ],
        },
    )
