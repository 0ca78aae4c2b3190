from splitkit.storage.base import KeyValueStorage
from splitkit.storage.memory import InMemoryStorage
from splitkit.storage.sql import SQLStorage

__all__ = ["KeyValueStorage", "InMemoryStorage", "SQLStorage"]
