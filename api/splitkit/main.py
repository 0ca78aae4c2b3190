import logging

from fastapi import FastAPI

from splitkit.core.config import settings
from splitkit.routers import assignments
from splitkit.services.engine import ExperimentEngine


def create_app(engine: ExperimentEngine) -> FastAPI:
    """Build the admin API around an existing engine."""
    logging.getLogger("splitkit").setLevel(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
    )
    app.state.engine = engine

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    # Routers
    app.include_router(assignments.router, prefix=settings.API_PREFIX)
    return app
