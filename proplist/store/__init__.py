"""Property record stores."""

from proplist.store.base import PropertyStore
from proplist.store.memory import InMemoryPropertyStore, JsonFilePropertyStore

__all__ = ["InMemoryPropertyStore", "JsonFilePropertyStore", "PropertyStore"]
