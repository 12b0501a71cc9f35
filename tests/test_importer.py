"""Tests for the spreadsheet import pipeline."""

import asyncio
import logging
from datetime import date

import pytest

from proplist.config import ImportConfig
from proplist.exceptions import EmptyResultError, ParseError, StoreWriteError
from proplist.generators import PropertyGenerator
from proplist.mapping import HEADERS
from proplist.models import CandidateRecord, FlatDetails, PropertyType
from proplist.pipeline import ImportPreview, prepare_import, run_import
from proplist.serialization import property_to_candidate
from proplist.spreadsheet import build_template, write_properties

NO_DELAY = ImportConfig(batch_size=5, batch_delay_seconds=0.0)


class TestPrepareImport:
    """Tests for prepare_import."""

    def test_template_imports_cleanly(self, today: date) -> None:
        preview = prepare_import(build_template(today), today)

        assert preview.total == 2
        assert preview.errors == []
        assert preview.warnings == []
        assert [c.property_type for c in preview.eligible] == ["Kothi", "Flat"]
        assert preview.headers == list(HEADERS)

    def test_flat_without_project(self, make_workbook, today: date) -> None:
        data = make_workbook(
            ["Property Type", "Sector/Phase", "CP Name", "Contact Number"],
            [["flat", "Sector 2", "Jane", "9876543211"]],
        )

        preview = prepare_import(data, today)

        assert preview.errors == ["Row 2: Project is required for Flat properties"]
        assert preview.has_errors
        assert preview.eligible[0].property_type == "Flat"

    def test_invalid_rows_filtered(self, make_workbook, today: date) -> None:
        data = make_workbook(
            ["Property Type", "Sector/Phase"],
            [["Kothi", "Sector 1"], ["Villa", "Sector 2"], [None, "Sector 3"], ["plot", "Sector 4"]],
        )

        preview = prepare_import(data, today)

        assert len(preview.candidates) == 4
        assert [c.sector_phase for c in preview.eligible] == ["Sector 1", "Sector 4"]
        assert "Row 3: Invalid Property Type 'Villa'. Must be: Kothi, Flat, Commercial, or Plot" in preview.errors
        assert "Row 4: Property Type is required" in preview.errors

    def test_soft_warnings(self, make_workbook, today: date) -> None:
        data = make_workbook(["Property Type"], [["Plot"]])

        preview = prepare_import(data, today)

        assert preview.errors == []
        assert preview.warnings == [
            "Row 2: Missing Sector/Phase",
            "Row 2: Missing CP Name",
            "Row 2: Missing Contact Number",
        ]

    def test_no_valid_rows(self, make_workbook, today: date) -> None:
        data = make_workbook(["Type", "Sector/Phase"], [["Kothi", "Sector 1"]])

        with pytest.raises(EmptyResultError) as exc_info:
            prepare_import(data, today)

        message = str(exc_info.value)
        assert "No valid properties found" in message
        assert "Kothi, Flat, Commercial, Plot" in message
        assert "Available columns in your file: Type, Sector/Phase" in message
        assert exc_info.value.found_columns == ["Type", "Sector/Phase"]

    def test_header_only(self, make_workbook, today: date) -> None:
        with pytest.raises(ParseError, match="no data rows"):
            prepare_import(make_workbook(list(HEADERS)), today)

    def test_preview_limit(self, today: date) -> None:
        data = write_properties(PropertyGenerator(seed=1).generate_many(8, today=today))

        preview = prepare_import(data, today)

        assert len(preview.preview()) == 5
        assert len(preview.preview(limit=3)) == 3
        assert preview.total == 8

    def test_row_numbers_skip_blank_rows(self, make_workbook, today: date) -> None:
        data = make_workbook(
            ["Property Type", "Project"],
            [["Kothi", None], [None, None], ["Flat", None]],
        )

        preview = prepare_import(data, today)

        assert preview.errors == ["Row 4: Project is required for Flat properties"]
        assert "Row 4: Missing CP Name" in preview.warnings
        assert "Row 3: Missing CP Name" not in preview.warnings

    def test_formula_like_text_roundtrip(self, kothi, today: date) -> None:
        kothi.demand = "=50 Lakh"
        kothi.expectations = "=SUM(1,2)"

        preview = prepare_import(write_properties([kothi]), today)

        assert preview.candidates == [property_to_candidate(kothi)]

    def test_generated_roundtrip(self, seed: int, today: date) -> None:
        properties = PropertyGenerator(seed=seed).generate_many(10, today=today)

        preview = prepare_import(write_properties(properties), today)

        assert preview.candidates == [property_to_candidate(p) for p in properties]


class TestRunImport:
    """Tests for run_import."""

    def test_writes_eligible(self, store, make_workbook, today: date) -> None:
        data = make_workbook(
            ["Property Type", "Project", "Sector/Phase", "Kothi Number"],
            [["Flat", "Green", "Sector 2", "99"], ["Villa", "", "Sector 3", ""], ["Kothi", "", "Sector 1", "12"]],
        )
        preview = prepare_import(data, today)
        progress: list[float] = []

        result = asyncio.run(run_import(preview, store, NO_DELAY, on_progress=progress.append))

        assert result.count == 2
        saved = [store.records[i] for i in result.ids]
        assert saved[0].property_type == PropertyType.FLAT
        assert saved[0].details == FlatDetails(project="Green")
        assert saved[1].property_type == PropertyType.KOTHI
        assert saved[1].date == "2024-06-15"
        assert progress == [100.0]

    def test_store_failure(self, flaky_store_factory, today: date) -> None:
        properties = PropertyGenerator(seed=3).generate_many(12, today=today)
        preview = prepare_import(write_properties(properties), today)
        store = flaky_store_factory(fail_on={7})

        with pytest.raises(StoreWriteError, match="Failed to add property 7: quota exceeded"):
            asyncio.run(run_import(preview, store, NO_DELAY))

        assert len(store.records) == 6

    def test_nothing_eligible(self, store) -> None:
        preview = ImportPreview(headers=["Type"], candidates=[], eligible=[])

        with pytest.raises(EmptyResultError):
            asyncio.run(run_import(preview, store, NO_DELAY))

    def test_skips_ineligible_without_row_logs(self, store, caplog: pytest.LogCaptureFixture) -> None:
        valid = CandidateRecord(property_type="Plot", date="2024-06-01")
        preview = ImportPreview(
            headers=["Property Type"],
            candidates=[valid, CandidateRecord(property_type="Villa")],
            eligible=[valid, CandidateRecord(property_type="Villa")],
        )

        with caplog.at_level(logging.INFO, logger="proplist"):
            result = asyncio.run(run_import(preview, store, NO_DELAY))

        assert result.count == 1
        assert "filtered out" not in caplog.text
