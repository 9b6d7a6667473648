"""Tests for layout validation and file import/export."""
import io
import json

import pandas as pd
import pytest

from platecrafter.engine import PlateGrid
from platecrafter.errors import LayoutFormatError
from platecrafter.models import ConcentrationUnit, ControlType
from platecrafter.services import FileService, LayoutService


@pytest.fixture
def layout_service(plate_format):
    return LayoutService(plate_format)


@pytest.fixture
def file_service(layout_service):
    return FileService(layout_service)


@pytest.fixture
def grid(plate_format, layout_records):
    return PlateGrid.from_wells(plate_format, layout_records)


class TestLayoutService:
    """Candidate layout validation."""

    def test_parse_layout(self, layout_service, layout_records):
        grid = layout_service.parse_layout(layout_records)
        assert grid["A1"].compound == "Aspirin"

    def test_parse_non_array(self, layout_service):
        with pytest.raises(LayoutFormatError):
            layout_service.parse_layout({"wells": []})

    def test_valid_layout(self, layout_service, layout_records):
        assert layout_service.validate_layout(layout_records) == []

    def test_errors(self, layout_service, layout_records):
        issues = layout_service.validate_layout(layout_records[:90])
        assert issues[0] == {"type": "error", "message": "expected 96 wells, got 90"}
        assert all(issue["type"] == "error" for issue in issues)

    def test_warnings(self, layout_service, layout_records):
        layout_records[4].update(concentration=5)
        layout_records[5].update(compound="Orphan")
        issues = layout_service.validate_layout(layout_records)
        assert {"type": "warning", "message": "Well A5 has a concentration but no compound"} in issues
        assert any(i["message"].startswith("Well A6 has compound 'Orphan'") for i in issues)


class TestExport:
    """JSON and CSV export."""

    def test_json_round_trip(self, file_service, grid):
        content = file_service.export_json(grid).encode("utf-8")
        assert file_service.parse_file(content, "layout.json") == grid

    def test_json_is_well_array(self, file_service, grid):
        records = json.loads(file_service.export_json(grid))
        assert len(records) == 96
        assert records[0]["id"] == "A1"
        assert records[0]["replicateGroup"] == 1

    def test_csv_columns(self, file_service, grid):
        df = pd.read_csv(io.StringIO(file_service.export_csv(grid)), keep_default_na=False)
        assert list(df.columns) == list(FileService.CSV_HEADERS.values()) + ["Display Concentration"]
        assert df.loc[0, "Display Concentration"] == "12.50 µM"
        assert df.loc[0, "Well ID"] == "A1"

    def test_csv_mass_display(self, file_service, grid):
        df = pd.read_csv(
            io.StringIO(file_service.export_csv(grid, ConcentrationUnit.MASS)), keep_default_na=False
        )
        assert df.loc[0, "Display Concentration"] == "2.25 µg/mL"

    def test_csv_round_trip(self, file_service, grid):
        content = file_service.export_csv(grid).encode("utf-8")
        assert file_service.parse_file(content, "layout.csv") == grid


class TestImport:
    """Tabular import."""

    def _csv(self, plate_format, position_format="{}"):
        rows = ["Well,Drug,Conc,Control"]
        for well_id in plate_format.well_ids():
            position = position_format.format(well_id)
            rows.append(f"{position},,,")
        rows[1] = "A01,Aspirin,10,Positive"
        return "\n".join(rows).encode("utf-8")

    def test_alias_columns_and_padded_positions(self, file_service, plate_format):
        grid = file_service.parse_file(self._csv(plate_format), "plate.CSV")
        well = grid["A1"]
        assert well.compound == "Aspirin"
        assert well.concentration == 10
        assert well.control_type == ControlType.POSITIVE
        assert grid["B1"].control_type == ControlType.NONE

    def test_missing_id_column(self, file_service):
        with pytest.raises(LayoutFormatError, match="Well ID"):
            file_service.parse_file(b"Compound,Conc\nX,1\n", "plate.csv")

    def test_incomplete_table(self, file_service):
        with pytest.raises(LayoutFormatError) as exc_info:
            file_service.parse_file(b"Well ID,Compound\nA1,X\n", "plate.csv")
        assert "expected 96 wells, got 1" in exc_info.value.problems

    def test_excel(self, file_service, grid, tmp_path):
        path = tmp_path / "layout.xlsx"
        pd.DataFrame(grid.to_records()).to_excel(path, index=False)
        assert file_service.parse_file(path.read_bytes(), "layout.xlsx") == grid

    def test_unsupported_extension(self, file_service):
        with pytest.raises(ValueError, match="Unsupported"):
            file_service.parse_file(b"", "layout.txt")

    def test_legacy_excel_rejected(self, file_service):
        with pytest.raises(ValueError, match="Unsupported"):
            file_service.parse_file(b"\xd0\xcf\x11\xe0", "layout.xls")

    def test_invalid_json(self, file_service):
        with pytest.raises(ValueError):
            file_service.parse_file(b"{not json", "layout.json")
