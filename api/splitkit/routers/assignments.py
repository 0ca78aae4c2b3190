import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from splitkit.core.dependencies import get_engine
from splitkit.core.errors import AllocationError, UnknownTestError, UnknownVariantError
from splitkit.services.engine import ExperimentEngine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assignments"])


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class VariantWeightOut(BaseModel):
    name: str
    weight: float


class ABTestOut(BaseModel):
    name: str
    kind: str
    variants: list[VariantWeightOut]


class AssignmentOut(BaseModel):
    test: str
    variant: str
    is_test_variant: bool


class AssignmentUpdate(BaseModel):
    variant: str


class MigrateRequest(BaseModel):
    from_key: str


class MigrateOut(BaseModel):
    migrated: bool
    rejected: dict[str, str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@contextmanager
def _engine_errors() -> Iterator[None]:
    try:
        yield
    except UnknownTestError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except UnknownVariantError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except AllocationError as exc:
        logger.warning("Allocation failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


def _assignment(engine: ExperimentEngine, name: str) -> AssignmentOut:
    test = engine.resolve_test(name)
    variant = engine.variant(test)
    return AssignmentOut(test=name, variant=variant, is_test_variant=test.is_test_variant(variant))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/tests", response_model=list[ABTestOut])
def list_tests(engine: ExperimentEngine = Depends(get_engine)) -> list[ABTestOut]:
    """List every registered test with its variants and weights."""
    tests = []
    for name in engine.all_tests:
        test = engine.resolve_test(name)
        variants = [
            VariantWeightOut(name=variant, weight=weight)
            for variant, weight in engine.all_variants_and_weights(name)
        ]
        tests.append(ABTestOut(name=name, kind=test.variants.kind, variants=variants))
    return tests


@router.get("/assignments", response_model=dict[str, str])
def list_assignments(engine: ExperimentEngine = Depends(get_engine)) -> dict[str, str]:
    """Current assignments keyed by test name."""
    return engine.variants_by_test_name


@router.delete("/assignments", status_code=status.HTTP_204_NO_CONTENT)
def reset_assignments(engine: ExperimentEngine = Depends(get_engine)) -> None:
    """Clear every assignment, in memory and in storage."""
    engine.reset()


@router.post("/assignments/migrate", response_model=MigrateOut)
def migrate_assignments(body: MigrateRequest, engine: ExperimentEngine = Depends(get_engine)) -> MigrateOut:
    """Move assignments stored under ``from_key`` to the engine's storage key."""
    rejected = engine.migrate(body.from_key)
    return MigrateOut(migrated=rejected is not None, rejected=rejected or {})


@router.get("/tests/{name}/variant", response_model=AssignmentOut)
def get_variant(name: str, engine: ExperimentEngine = Depends(get_engine)) -> AssignmentOut:
    """Get the test's variant, allocating one on first call."""
    with _engine_errors():
        return _assignment(engine, name)


@router.put("/tests/{name}/variant", response_model=AssignmentOut)
def set_variant(
    name: str,
    body: AssignmentUpdate,
    engine: ExperimentEngine = Depends(get_engine),
) -> AssignmentOut:
    """Override the test's variant."""
    with _engine_errors():
        engine.set_variant(body.variant, name)
        return _assignment(engine, name)
