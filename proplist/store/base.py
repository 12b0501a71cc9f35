"""Record store interface."""

from typing import Any, Mapping, Protocol

from proplist.models import Property


class PropertyStore(Protocol):
    """Document store holding property records.

    Every call may fail. Callers do not interpret store-specific errors
    beyond their message.
    """

    async def add(self, prop: Property) -> str:
        """Persist a new record and return its id."""
        ...

    async def get_all(self) -> list[Property]:
        """All records, newest first."""
        ...

    async def get_by_id(self, record_id: str) -> Property | None:
        ...

    async def update(self, record_id: str, changes: Mapping[str, Any]) -> None:
        """Apply a partial document keyed by field key."""
        ...

    async def delete(self, record_id: str) -> None:
        ...
