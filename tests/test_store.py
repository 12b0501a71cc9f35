"""Tests for property stores."""

import asyncio
import json
from pathlib import Path

import pytest

from proplist.exceptions import RecordNotFoundError, StoreError
from proplist.models import FlatDetails, Property, PropertyType
from proplist.store import InMemoryPropertyStore, JsonFilePropertyStore


class TestInMemoryStore:
    """Tests for InMemoryPropertyStore."""

    def test_add_assigns_id_and_timestamps(self, store: InMemoryPropertyStore, kothi: Property) -> None:
        record_id = asyncio.run(store.add(kothi))

        saved = asyncio.run(store.get_by_id(record_id))
        assert saved.id == record_id
        assert saved.created_at is not None
        assert saved.updated_at == saved.created_at
        assert kothi.id is None

    def test_add_copies_record(self, store: InMemoryPropertyStore, flat: Property) -> None:
        record_id = asyncio.run(store.add(flat))
        flat.details.project = "Changed"

        assert store.records[record_id].project == "Green Valley Apartments"

    def test_get_all_newest_first(self, store: InMemoryPropertyStore, kothi, flat, plot) -> None:
        async def scenario():
            for prop in (kothi, flat, plot):
                await store.add(prop)
            return await store.get_all()

        result = asyncio.run(scenario())

        assert [p.property_type for p in result] == [PropertyType.PLOT, PropertyType.FLAT, PropertyType.KOTHI]

    def test_get_missing(self, store: InMemoryPropertyStore) -> None:
        assert asyncio.run(store.get_by_id("missing")) is None

    def test_update(self, store: InMemoryPropertyStore, kothi: Property) -> None:
        record_id = asyncio.run(store.add(kothi))
        created = store.records[record_id].created_at

        asyncio.run(store.update(record_id, {"demand": "60 Lakh"}))

        saved = store.records[record_id]
        assert saved.demand == "60 Lakh"
        assert saved.created_at == created
        assert saved.updated_at >= created
        assert saved.id == record_id

    def test_update_switches_variant(self, store: InMemoryPropertyStore, kothi: Property) -> None:
        record_id = asyncio.run(store.add(kothi))

        asyncio.run(store.update(record_id, {"propertyType": "Flat", "project": "Sunrise"}))

        assert store.records[record_id].details == FlatDetails(project="Sunrise")

    def test_update_missing(self, store: InMemoryPropertyStore) -> None:
        with pytest.raises(RecordNotFoundError):
            asyncio.run(store.update("missing", {"demand": "1"}))

    def test_update_invalid(self, store: InMemoryPropertyStore, kothi: Property) -> None:
        record_id = asyncio.run(store.add(kothi))

        with pytest.raises(StoreError, match="Unknown field"):
            asyncio.run(store.update(record_id, {"notes": "x"}))

    def test_delete(self, store: InMemoryPropertyStore, kothi: Property) -> None:
        record_id = asyncio.run(store.add(kothi))

        asyncio.run(store.delete(record_id))

        assert store.records == {}

    def test_delete_missing_is_noop(self, store: InMemoryPropertyStore) -> None:
        asyncio.run(store.delete("missing"))


class TestJsonFileStore:
    """Tests for JsonFilePropertyStore."""

    def test_persists_and_reloads(self, tmp_path: Path, kothi, flat) -> None:
        path = tmp_path / "store.json"
        store = JsonFilePropertyStore(path)

        async def scenario():
            await store.add(kothi)
            await store.add(flat)

        asyncio.run(scenario())
        reloaded = JsonFilePropertyStore(path)
        result = asyncio.run(reloaded.get_all())

        assert [p.property_type for p in result] == [PropertyType.FLAT, PropertyType.KOTHI]
        assert result[0].project == "Green Valley Apartments"
        assert result[1].id in store.records

    def test_file_contents(self, tmp_path: Path, plot) -> None:
        path = tmp_path / "store.json"
        store = JsonFilePropertyStore(path)
        record_id = asyncio.run(store.add(plot))

        documents = json.loads(path.read_text(encoding="utf-8"))

        assert documents[0]["id"] == record_id
        assert documents[0]["propertyType"] == "Plot"
        assert documents[0]["plotNumber"] == "77"
        assert "createdAt" in documents[0]

    def test_delete_persisted(self, tmp_path: Path, plot) -> None:
        path = tmp_path / "store.json"
        store = JsonFilePropertyStore(path)
        record_id = asyncio.run(store.add(plot))

        asyncio.run(store.delete(record_id))

        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = JsonFilePropertyStore(tmp_path / "nested" / "store.json")
        assert asyncio.run(store.get_all()) == []

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StoreError, match="Cannot read store file"):
            JsonFilePropertyStore(path)

    def test_invalid_record(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text(json.dumps([{"id": "1", "propertyType": "Villa"}]), encoding="utf-8")

        with pytest.raises(StoreError, match="Corrupt record"):
            JsonFilePropertyStore(path)
