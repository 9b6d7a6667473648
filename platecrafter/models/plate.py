"""Plate format data models."""
from enum import Enum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

from platecrafter.errors import InvalidCoordinateError


class PlateType(int, Enum):
    """Plate type enumeration."""
    PLATE_96 = 96
    PLATE_384 = 384


class PlateFormat(BaseModel):
    """
    Row and column labels of a rectangular plate.

    Label order defines both the grid shape and the iteration order: wells
    are enumerated row-major, rows outer and columns inner.
    """
    model_config = ConfigDict(frozen=True)

    row_labels: Tuple[str, ...]
    col_labels: Tuple[str, ...]

    @property
    def rows(self) -> int:
        return len(self.row_labels)

    @property
    def cols(self) -> int:
        return len(self.col_labels)

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def coordinate(self, row_index: int, col_index: int) -> str:
        """Build a well id from 0-based row and column indexes."""
        return f"{self.row_labels[row_index]}{self.col_labels[col_index]}"

    def parse(self, well_id: str) -> Tuple[int, int]:
        """
        Decompose a well id into 0-based (row, column) indexes.

        Raises:
            InvalidCoordinateError: if the id does not split into exactly one
                row label prefix and one column label suffix.
        """
        matches = []
        for row_index, row_label in enumerate(self.row_labels):
            if not well_id.startswith(row_label):
                continue
            suffix = well_id[len(row_label):]
            if suffix in self.col_labels:
                matches.append((row_index, self.col_labels.index(suffix)))
        if len(matches) != 1:
            raise InvalidCoordinateError(well_id)
        return matches[0]

    def is_valid(self, well_id: str) -> bool:
        try:
            self.parse(well_id)
        except InvalidCoordinateError:
            return False
        return True

    def well_ids(self) -> List[str]:
        """All well ids in row-major order."""
        return [f"{row}{col}" for row in self.row_labels for col in self.col_labels]


PLATE_96_WELL = PlateFormat(
    row_labels=tuple("ABCDEFGH"),
    col_labels=tuple(str(c) for c in range(1, 13)),
)

PLATE_384_WELL = PlateFormat(
    row_labels=tuple("ABCDEFGHIJKLMNOP"),
    col_labels=tuple(str(c) for c in range(1, 25)),
)

# Plate formats by plate type
PLATE_FORMATS: Dict[int, PlateFormat] = {
    96: PLATE_96_WELL,
    384: PLATE_384_WELL,
}


def get_plate_format(plate_type: PlateType) -> PlateFormat:
    """Get the plate format for a plate type."""
    return PLATE_FORMATS[PlateType(plate_type).value]
