"""In-memory and JSON-file property stores."""

import json
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from proplist.exceptions import InvalidRecordError, RecordNotFoundError, StoreError
from proplist.models import Property
from proplist.serialization import apply_changes, from_document, to_document

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InMemoryPropertyStore:
    """Store keeping records in a dict keyed by id.

    ``created_at`` and ``updated_at`` are owned here: callers' values are
    overwritten on add, and ``updated_at`` is refreshed on every update.
    """

    records: dict[str, Property] = field(default_factory=dict)
    _sequence: dict[str, int] = field(default_factory=dict)
    _counter: int = 0

    async def add(self, prop: Property) -> str:
        """Add a copy of ``prop`` under a fresh id."""
        record_id = uuid.uuid4().hex
        now = _now()
        self.records[record_id] = replace(
            prop, details=replace(prop.details), id=record_id, created_at=now, updated_at=now
        )
        self._counter += 1
        self._sequence[record_id] = self._counter
        self._persist()
        logger.debug("Property added with ID: %s", record_id, extra={"record_id": record_id})
        return record_id

    async def get_all(self) -> list[Property]:
        """Return all records ordered by creation, newest first."""
        return sorted(
            self.records.values(),
            key=lambda p: (p.created_at, self._sequence.get(p.id, 0)),
            reverse=True,
        )

    async def get_by_id(self, record_id: str) -> Property | None:
        return self.records.get(record_id)

    async def update(self, record_id: str, changes: Mapping[str, Any]) -> None:
        """Merge ``changes`` into an existing record."""
        current = self.records.get(record_id)
        if current is None:
            raise RecordNotFoundError(f"Property {record_id} not found")
        try:
            updated = apply_changes(current, changes)
        except InvalidRecordError as exc:
            raise StoreError(f"Cannot update property {record_id}: {exc}") from exc
        self.records[record_id] = replace(
            updated, id=record_id, created_at=current.created_at, updated_at=_now()
        )
        self._persist()

    async def delete(self, record_id: str) -> None:
        """Delete a record; unknown ids are ignored."""
        self.records.pop(record_id, None)
        self._sequence.pop(record_id, None)
        self._persist()

    def _persist(self) -> None:
        """Hook for subclasses that write records somewhere durable."""


class JsonFilePropertyStore(InMemoryPropertyStore):
    """In-memory store mirrored to a JSON file after every mutation."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            documents = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read store file {self.path}: {exc}") from exc

        # File is written newest first
        for document in reversed(documents):
            try:
                prop = from_document(document)
            except InvalidRecordError as exc:
                raise StoreError(f"Corrupt record in {self.path}: {exc}") from exc
            record_id = prop.id or uuid.uuid4().hex
            if prop.created_at is None:
                prop = replace(prop, created_at=_now())
            self.records[record_id] = replace(prop, id=record_id)
            self._counter += 1
            self._sequence[record_id] = self._counter
        logger.debug("Loaded %d properties from %s", len(self.records), self.path)

    def _persist(self) -> None:
        ordered = sorted(
            self.records.values(),
            key=lambda p: (p.created_at, self._sequence.get(p.id, 0)),
            reverse=True,
        )
        documents = [to_document(prop) for prop in ordered]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(documents, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Cannot write store file {self.path}: {exc}") from exc
