from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError

from app.core.metrics import get_metrics
from app.core.logging import get_logger
from app.db.database import check_db


logger = get_logger(__name__)
router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def prometheus_metrics():
    try:
        metrics_data = get_metrics()
    except ValueError as e:
        logger.error("metrics_generation_failed", error=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate metrics")
    return Response(
        content=metrics_data,
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@router.get("/health/db", include_in_schema=False)
async def database_health_check():
    try:
        await check_db()
    except (SQLAlchemyError, OSError) as e:
        logger.error("database_health_check_failed", error=str(e))
        return {"status": "unhealthy", "database": "disconnected", "error": str(e)}
    return {"status": "healthy", "database": "connected"}
