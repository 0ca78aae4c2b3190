"""In-memory assignment table with write-through persistence.

The table maps each test to its assigned variant.  Every ``put`` overwrites
the whole record under the configured storage key, so whatever else wrote
to that key in the meantime is lost (last writer wins).

Loading is forgiving: a missing or malformed record means there is nothing
to load, and entries that name an unknown test or an undeclared variant are
dropped.  Migration reports the entries it dropped instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from splitkit.core.errors import UnknownTestError, UnknownVariantError
from splitkit.models.ab_test import ABTest
from splitkit.services.registry import TestRegistry
from splitkit.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)

PutHook = Callable[[str, str], None]


class AssignmentStore:
    """Assignment table for one storage key.

    Parameters
    ----------
    registry : TestRegistry
        Used to validate persisted entries.
    storage : KeyValueStorage
        Backend the table is written through to.
    storage_key : str
        Key the table is persisted under.
    on_put : PutHook | None
        Called with ``(variant, test_name)`` after each successful ``put``.
    """

    def __init__(
        self,
        registry: TestRegistry,
        storage: KeyValueStorage,
        storage_key: str,
        on_put: PutHook | None = None,
    ) -> None:
        self.registry = registry
        self.storage = storage
        self.storage_key = storage_key
        self.on_put = on_put
        self._table: dict[ABTest, str] = {}

    # ------------------------------------------------------------------
    # Table access
    # ------------------------------------------------------------------

    def get(self, test: ABTest) -> str | None:
        return self._table.get(test)

    def put(self, test: ABTest, variant: str) -> None:
        """Assign ``variant`` to ``test``, persist the table, then notify."""
        if variant not in test.variant_names():
            raise UnknownVariantError(variant, test.name)
        self._table[test] = variant
        self.persist()
        if self.on_put is not None:
            self.on_put(variant, test.name)

    def as_dict(self) -> dict[str, str]:
        return {test.name: variant for test, variant in self._table.items()}

    def __len__(self) -> int:
        return len(self._table)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def persist(self) -> None:
        self.storage.set(self.storage_key, self.as_dict())

    def load(self) -> None:
        self.load_from(self.storage_key)

    def load_from(self, key: str) -> None:
        """Replace the table with the valid entries stored under ``key``.

        Leaves the table untouched when nothing usable is stored there.
        """
        record = self._read(key)
        if record is None:
            return
        accepted, rejected = self._validate(record)
        for name, variant in rejected.items():
            logger.debug("Dropped stale assignment %r=%r from %r", name, variant, key)
        self._table = accepted

    def reset(self) -> None:
        self._table = {}
        self.storage.remove(self.storage_key)

    def migrate(self, from_key: str) -> dict[str, str] | None:
        """Move the record stored under ``from_key`` to the configured key.

        Returns
        -------
        dict[str, str] | None
            ``None`` if nothing was stored under ``from_key``; otherwise the
            entries that could not be migrated (empty if all were).
        """
        record = self._read(from_key)
        if record is None:
            return None

        accepted, rejected = self._validate(record)
        self._table = accepted
        self.storage.remove(from_key)
        self.persist()

        if rejected:
            logger.warning("Could not migrate %d assignment(s) from %r: %s", len(rejected), from_key, rejected)
        logger.info("Migrated %d assignment(s) from %r to %r", len(accepted), from_key, self.storage_key)
        return rejected

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read(self, key: str) -> Mapping[Any, Any] | None:
        record = self.storage.get(key)
        if not isinstance(record, Mapping):
            return None
        return record

    def _validate(self, record: Mapping[Any, Any]) -> tuple[dict[ABTest, str], dict[str, str]]:
        accepted: dict[ABTest, str] = {}
        rejected: dict[str, str] = {}
        for name, variant in record.items():
            test = self._resolve_entry(name, variant)
            if test is None:
                rejected[str(name)] = str(variant)
            else:
                accepted[test] = variant
        return accepted, rejected

    def _resolve_entry(self, name: Any, variant: Any) -> ABTest | None:
        if not isinstance(name, str) or not isinstance(variant, str):
            return None
        try:
            test = self.registry.resolve(name)
        except UnknownTestError:
            return None
        if variant not in test.variant_names():
            return None
        return test
