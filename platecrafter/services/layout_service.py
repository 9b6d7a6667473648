"""Layout validation service."""
import logging
from typing import Any, Iterable, List, Mapping

from platecrafter.engine import PlateGrid
from platecrafter.errors import LayoutFormatError
from platecrafter.models import ControlType, PlateFormat

logger = logging.getLogger(__name__)


class LayoutService:
    """Service for validating candidate layouts before they are committed."""

    def __init__(self, plate_format: PlateFormat):
        self.plate_format = plate_format

    def parse_layout(self, records: Any) -> PlateGrid:
        """
        Build a grid from a persisted or generated well array.

        Args:
            records: Array of well objects, one per coordinate

        Returns:
            Validated grid

        Raises:
            LayoutFormatError: if the array does not cover the plate exactly
        """
        if not isinstance(records, list):
            raise LayoutFormatError(
                f"layout must be an array of {self.plate_format.size} wells"
            )
        return PlateGrid.from_wells(self.plate_format, records)

    def validate_layout(self, records: Iterable[Mapping[str, Any]]) -> List[dict]:
        """
        Validate a layout without committing it.

        Args:
            records: Array of well objects

        Returns:
            List of validation issues
        """
        issues = []

        try:
            grid = self.parse_layout(records)
        except LayoutFormatError as e:
            for problem in e.problems or [str(e)]:
                issues.append({"type": "error", "message": problem})
            return issues

        for well in grid:
            if well.concentration > 0 and not well.compound:
                issues.append({
                    "type": "warning",
                    "message": f"Well {well.id} has a concentration but no compound"
                })
            if (well.compound and well.concentration <= 0
                    and well.control_type == ControlType.NONE):
                issues.append({
                    "type": "warning",
                    "message": f"Well {well.id} has compound {well.compound!r} but no concentration"
                })

        return issues

    def export_records(self, grid: PlateGrid) -> List[dict]:
        """Serialize a grid to the persisted layout format."""
        return grid.to_records()
