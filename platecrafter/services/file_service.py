"""Layout file import and export service."""
import io
import json
import logging
import re
from typing import Any, List

import pandas as pd

from platecrafter.engine import PlateGrid, format_concentration
from platecrafter.errors import LayoutFormatError
from platecrafter.models import ConcentrationUnit
from platecrafter.services.layout_service import LayoutService

logger = logging.getLogger(__name__)


class FileService:
    """Service for reading and writing layout files."""

    # Column name mappings
    COLUMN_MAPPING = {
        'id': ['id', 'Well ID', 'Well', 'Position', 'well', 'Well Position'],
        'compound': ['compound', 'Compound', 'Drug', 'Compound Name'],
        'concentration': ['concentration', 'Concentration (µM)', 'Concentration (uM)', 'Conc', 'Concentration'],
        'mw': ['mw', 'MW (g/mol)', 'MW', 'Molecular Weight'],
        'strain': ['strain', 'Strain'],
        'controlType': ['controlType', 'Control Type', 'Control'],
        'replicateGroup': ['replicateGroup', 'Replicate Group', 'Replicate'],
        'drugSlot': ['drugSlot', 'Drug Slot'],
    }

    # Export column headers, in order
    CSV_HEADERS = {
        'id': 'Well ID',
        'compound': 'Compound',
        'mw': 'MW (g/mol)',
        'concentration': 'Concentration (µM)',
        'strain': 'Strain',
        'controlType': 'Control Type',
        'replicateGroup': 'Replicate Group',
        'drugSlot': 'Drug Slot',
    }

    def __init__(self, layout_service: LayoutService):
        self.layout_service = layout_service

    def export_json(self, grid: PlateGrid) -> str:
        """Export the grid as a JSON well array, in grid order."""
        return json.dumps(self.layout_service.export_records(grid), indent=2, ensure_ascii=False)

    def export_csv(self, grid: PlateGrid, unit: ConcentrationUnit = ConcentrationUnit.MOLAR) -> str:
        """
        Export the grid as a data table.

        The µM column is the stored value and reloads losslessly; the display
        column is auto-scaled in `unit` for reading only.
        """
        df = pd.DataFrame(self.layout_service.export_records(grid))
        df = df[list(self.CSV_HEADERS)].rename(columns=self.CSV_HEADERS)
        df['Display Concentration'] = [
            format_concentration(w.concentration, w.mw, unit) for w in grid
        ]
        return df.to_csv(index=False)

    def parse_file(self, content: bytes, filename: str) -> PlateGrid:
        """
        Parse an uploaded layout file.

        Args:
            content: File content as bytes
            filename: Original filename

        Returns:
            Validated grid

        Raises:
            ValueError: unsupported or unreadable file
            LayoutFormatError: file does not describe a complete plate
        """
        name = filename.lower()
        if name.endswith('.json'):
            records = self._parse_json(content)
        elif name.endswith('.csv'):
            records = self._records_from_frame(self._parse_csv(content))
        elif name.endswith('.xlsx'):
            records = self._records_from_frame(self._parse_excel(content))
        else:
            raise ValueError(f"Unsupported file format: {filename}")

        grid = self.layout_service.parse_layout(records)
        logger.info("Parsed layout file %s (%d wells)", filename, len(grid))
        return grid

    def _parse_json(self, content: bytes) -> Any:
        """Parse JSON layout file."""
        try:
            return json.loads(content.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValueError(f"Could not parse JSON layout: {e}")

    def _parse_csv(self, content: bytes) -> pd.DataFrame:
        """Parse CSV file."""
        # Try different encodings
        for encoding in ['utf-8', 'latin1']:
            try:
                return pd.read_csv(io.BytesIO(content), encoding=encoding, dtype=str, keep_default_na=False)
            except UnicodeDecodeError:
                continue
        raise ValueError("Could not decode CSV file")

    def _parse_excel(self, content: bytes) -> pd.DataFrame:
        """Parse Excel file."""
        # Use the first sheet that looks like a layout table
        xl = pd.ExcelFile(io.BytesIO(content))

        for sheet_name in xl.sheet_names:
            df = pd.read_excel(xl, sheet_name=sheet_name, dtype=str, keep_default_na=False)
            if self._has_required_columns(df):
                return df

        return pd.read_excel(xl, dtype=str, keep_default_na=False)

    def _has_required_columns(self, df: pd.DataFrame) -> bool:
        """Check if dataframe has a well id column."""
        columns_lower = [str(c).lower() for c in df.columns]
        return any(alias.lower() in columns_lower for alias in self.COLUMN_MAPPING['id'])

    def _detect_columns(self, df: pd.DataFrame) -> dict:
        """Detect column mappings."""
        column_map = {}

        for standard_name, aliases in self.COLUMN_MAPPING.items():
            lowered = [a.lower() for a in aliases]
            for col in df.columns:
                if col in aliases or str(col).lower() in lowered:
                    column_map[standard_name] = col
                    break

        if 'id' not in column_map:
            raise LayoutFormatError("Missing required column: Well ID")

        return column_map

    def _records_from_frame(self, df: pd.DataFrame) -> List[dict]:
        """Convert a data table to well objects."""
        column_map = self._detect_columns(df)
        records = []

        for _, row in df.iterrows():
            record = {}
            for standard_name, col in column_map.items():
                value = str(row[col]).strip()
                if standard_name == 'id':
                    record['id'] = self._normalize_position(value)
                elif standard_name in ('concentration', 'mw'):
                    record[standard_name] = self._to_number(value, float)
                elif standard_name == 'replicateGroup':
                    record[standard_name] = self._to_number(value, int)
                elif standard_name == 'drugSlot':
                    record[standard_name] = value or None
                elif standard_name == 'controlType':
                    record[standard_name] = value or 'None'
                else:
                    record[standard_name] = value
            records.append(record)

        return records

    def _to_number(self, value: str, kind: type):
        if not value:
            return 0
        try:
            return kind(float(value))
        except ValueError:
            # Left for well validation to reject
            return value

    def _normalize_position(self, position: str) -> str:
        """Normalize well position to A1 format (A01 -> A1)."""
        position = position.strip().upper()

        match = re.match(r'^([A-Z]+)0*(\d+)$', position)
        if match:
            return f"{match.group(1)}{match.group(2)}"

        return position
