from fastapi import HTTPException, Request, status

from splitkit.services.engine import ExperimentEngine


def get_engine(request: Request) -> ExperimentEngine:
    """Return the engine the app was created with.

    Raises HTTP 503 if the app has no engine attached.
    """
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="No engine configured")
    return engine
