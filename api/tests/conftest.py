from typing import Callable, Iterable

import pytest

from splitkit.models.ab_test import ABTest
from splitkit.services.engine import ExperimentEngine
from splitkit.services.registry import Configuration
from splitkit.storage.memory import InMemoryStorage

STORAGE_KEY = "tests.splitkit.variants"
MIGRATE_KEY = "tests.splitkit.variants.migrate"


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def make_engine(storage: InMemoryStorage) -> Callable[..., ExperimentEngine]:
    """Build an engine over ``tests`` that draws from ``draws`` in order."""

    def _make(
        tests: Iterable[ABTest],
        draws: Iterable[float] = (),
        storage_key: str = STORAGE_KEY,
        backend=None,
    ) -> ExperimentEngine:
        configuration = Configuration(tests, storage_key=storage_key, random_source=iter(draws))
        return ExperimentEngine(configuration, backend if backend is not None else storage)

    return _make
