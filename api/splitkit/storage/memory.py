from __future__ import annotations

from typing import Mapping


class InMemoryStorage:
    """Process-local storage; values are copied in and out."""

    def __init__(self, records: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._records: dict[str, dict[str, str]] = {
            key: dict(value) for key, value in (records or {}).items()
        }

    def get(self, key: str) -> dict[str, str] | None:
        value = self._records.get(key)
        return dict(value) if value is not None else None

    def set(self, key: str, value: Mapping[str, str]) -> None:
        self._records[key] = dict(value)

    def remove(self, key: str) -> None:
        self._records.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._records
