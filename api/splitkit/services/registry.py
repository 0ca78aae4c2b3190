"""Known test definitions and the engine configuration that carries them."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from splitkit.core.config import settings
from splitkit.core.errors import UnknownTestError
from splitkit.models.ab_test import ABTest
from splitkit.stats.random_source import RandomSource, UniformRandomSource

logger = logging.getLogger(__name__)


class TestRegistry:
    """Name-keyed set of test definitions.

    Duplicate names collapse to one entry; the first definition wins.
    """

    def __init__(self, tests: Iterable[ABTest]) -> None:
        self._tests: dict[str, ABTest] = {}
        for test in tests:
            if test.name in self._tests:
                logger.warning("Duplicate test name %r ignored", test.name)
                continue
            self._tests[test.name] = test

    def resolve(self, name: str) -> ABTest:
        try:
            return self._tests[name]
        except KeyError:
            raise UnknownTestError(name) from None

    @property
    def names(self) -> list[str]:
        return list(self._tests)

    def __contains__(self, name: object) -> bool:
        return name in self._tests

    def __iter__(self) -> Iterator[ABTest]:
        return iter(self._tests.values())

    def __len__(self) -> int:
        return len(self._tests)


class Configuration:
    """Immutable engine configuration.

    Parameters
    ----------
    tests : Iterable[ABTest]
        Every active test.
    storage_key : str | None
        Key the assignment table is persisted under.  Defaults to
        ``settings.STORAGE_KEY``.
    random_source : RandomSource | None
        Iterator of draws in ``[0, 1)``.  Defaults to a
        ``UniformRandomSource`` seeded with ``settings.RANDOM_SEED``.
    """

    __slots__ = ("registry", "storage_key", "random_source")

    def __init__(
        self,
        tests: Iterable[ABTest],
        storage_key: str | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        object.__setattr__(self, "registry", TestRegistry(tests))
        object.__setattr__(self, "storage_key", storage_key if storage_key is not None else settings.STORAGE_KEY)
        object.__setattr__(
            self, "random_source", random_source if random_source is not None else UniformRandomSource(settings.RANDOM_SEED)
        )

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Configuration is immutable")

    @property
    def tests(self) -> list[ABTest]:
        return list(self.registry)
