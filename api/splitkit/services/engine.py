"""ExperimentEngine: the entry point for variant lookup and allocation.

Flow for a lookup:
1. Resolve the test by name (fail fast on typos)
2. Return the cached assignment if there is one
3. Otherwise draw from the random source and bucket the draw
4. Write the new assignment through to storage
5. Fire ``on_allocation``

A test is allocated at most once per engine unless ``set_variant``
overrides it.  All table access runs under one reentrant lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Sequence, Union

from splitkit.models.ab_test import ABTest
from splitkit.services.assignment import AssignmentStore
from splitkit.services.registry import Configuration
from splitkit.stats.distribution import allocate
from splitkit.storage.base import KeyValueStorage
from splitkit.storage.memory import InMemoryStorage

logger = logging.getLogger(__name__)

TestRef = Union[ABTest, str]
VariantHandler = Callable[[], None]
AllocationCallback = Callable[[str, str], None]


class ExperimentEngine:
    """Assigns, caches and persists test variants.

    The persisted table is loaded on construction.  Used as a context
    manager, the table is saved again on exit.

    Parameters
    ----------
    configuration : Configuration
        Tests, storage key and random source.
    storage : KeyValueStorage | None
        Persistence backend.  Defaults to a fresh ``InMemoryStorage``.
    on_allocation : AllocationCallback | None
        Called with ``(variant, test_name)`` after every allocation or
        override, once the table has been persisted.
    """

    def __init__(
        self,
        configuration: Configuration,
        storage: KeyValueStorage | None = None,
        on_allocation: AllocationCallback | None = None,
    ) -> None:
        self.configuration = configuration
        self.on_allocation = on_allocation
        self._lock = threading.RLock()
        self._store = AssignmentStore(
            configuration.registry,
            storage if storage is not None else InMemoryStorage(),
            configuration.storage_key,
            on_put=self._notify,
        )
        self.load()

    def __enter__(self) -> ExperimentEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.save()

    # ------------------------------------------------------------------
    # Tests
    # ------------------------------------------------------------------

    def resolve_test(self, name: str) -> ABTest:
        return self.configuration.registry.resolve(name)

    @property
    def all_tests(self) -> list[str]:
        return self.configuration.registry.names

    def all_variants_and_weights(self, name: str) -> list[tuple[str, float]]:
        """Declared ``(variant, weight)`` pairs for the test, in variant order."""
        test = self.resolve_test(name)
        return list(zip(test.variant_names(), test.variant_weights()))

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    def variant(self, test: TestRef) -> str:
        """Return the test's variant, allocating one on first use."""
        if isinstance(test, str):
            test = self.resolve_test(test)
        with self._lock:
            existing = self._store.get(test)
            if existing is not None:
                return existing
            registered = self.resolve_test(test.name)
            variant = self._allocate(registered)
            self._store.put(registered, variant)
            logger.info("Allocated variant %r for test %r", variant, test.name)
            return variant

    def set_variant(self, variant: str, test: TestRef) -> None:
        """Override the test's variant, even if it is unchanged."""
        name = test if isinstance(test, str) else test.name
        registered = self.resolve_test(name)
        with self._lock:
            self._store.put(registered, variant)
        logger.info("Set variant %r for test %r", variant, name)

    def is_test_variant(self, test: TestRef) -> bool:
        """``False`` for the control variant (index 0), ``True`` for any other."""
        registered = self.resolve_test(test if isinstance(test, str) else test.name)
        return registered.is_test_variant(self.variant(registered))

    @property
    def variants_by_test_name(self) -> dict[str, str]:
        with self._lock:
            return self._store.as_dict()

    # ------------------------------------------------------------------
    # Running tests
    # ------------------------------------------------------------------

    def run(self, test: TestRef, handlers: Sequence[Optional[VariantHandler]]) -> None:
        """Call the handler at the current variant's index.

        Nothing is called when ``handlers`` is shorter than the variant list
        or the slot holds ``None``.
        """
        registered = self.resolve_test(test if isinstance(test, str) else test.name)
        variant = self.variant(registered)
        names = registered.variant_names()
        if variant not in names:
            return
        index = names.index(variant)
        if index >= len(handlers) or handlers[index] is None:
            return
        handlers[index]()

    def run_binary(
        self,
        test: TestRef,
        control: VariantHandler | None = None,
        treatment: VariantHandler | None = None,
    ) -> None:
        """Call ``treatment`` for any non-control variant, ``control`` otherwise."""
        handler = treatment if self.is_test_variant(test) else control
        if handler is not None:
            handler()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        with self._lock:
            self._store.load()

    def save(self) -> None:
        with self._lock:
            self._store.persist()

    def reset(self) -> None:
        with self._lock:
            self._store.reset()
        logger.info("Reset all assignments under %r", self.configuration.storage_key)

    def migrate(self, from_key: str) -> dict[str, str] | None:
        with self._lock:
            return self._store.migrate(from_key)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _allocate(self, registered: ABTest) -> str:
        draw = next(self.configuration.random_source, None)
        index = allocate(registered.variant_weights(), draw)
        return registered.variant_names()[index]

    def _notify(self, variant: str, test_name: str) -> None:
        if self.on_allocation is None:
            return
        try:
            self.on_allocation(variant, test_name)
        except Exception:
            logger.exception("on_allocation callback failed for test %r", test_name)
            raise
