"""API routes module."""
from app.api.routes.metrics import router as metrics_router
from app.api.routes.workouts import router as workouts_router

__all__ = [
    "metrics_router",
    "workouts_router",
]
