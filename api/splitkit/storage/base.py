from __future__ import annotations

from typing import Mapping, Protocol


class KeyValueStorage(Protocol):
    """Persistence capability the assignment store writes through to.

    ``get`` returns ``None`` when nothing is stored under ``key``.  A stored
    value that is not a mapping is treated by callers as nothing stored.
    """

    def get(self, key: str) -> Mapping[str, str] | None: ...

    def set(self, key: str, value: Mapping[str, str]) -> None: ...

    def remove(self, key: str) -> None: ...
