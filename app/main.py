"""Main FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config.settings import get_settings
from app.core.error_handlers import domain_error_handler
from app.core.exceptions import DomainError
from app.core.logging import configure_logging, get_logger
from app.core.metrics import set_app_info
from app.db.database import close_all_engines, init_db
from app.middleware import MetricsMiddleware, RequestIDMiddleware

APP_VERSION = "0.1.0"

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    await init_db()
    logger.info("application_started", app=app.title, version=APP_VERSION)

    yield

    await close_all_engines()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.debug)
    set_app_info(APP_VERSION, "development" if settings.debug else "production")

    app = FastAPI(
        title=settings.app_name,
        description="Suggests weekly workout plans built from the exercise catalog",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(MetricsMiddleware)
    # Added last so it runs first and every log line carries the request id
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainError, domain_error_handler)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    from app.api.routes import metrics_router, workouts_router

    app.include_router(workouts_router, prefix="/ai", tags=["Workouts"])
    app.include_router(metrics_router, tags=["Monitoring"])

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
