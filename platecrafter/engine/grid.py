"""Plate grid model: the canonical well collection of one plate."""
import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from platecrafter.errors import InvalidCoordinateError, LayoutFormatError
from platecrafter.models import PlateFormat, Well

logger = logging.getLogger(__name__)


class PlateGrid:
    """
    Immutable, ordered set of wells with exactly one well per coordinate.

    Wells are kept in the format's row-major order. Edits never mutate a grid;
    `replace` derives a new one, which the history store then commits.
    """

    def __init__(self, plate_format: PlateFormat, wells: Iterable[Well]):
        self.plate_format = plate_format
        self._wells: Tuple[Well, ...] = tuple(wells)
        self._index: Dict[str, Well] = {w.id: w for w in self._wells}

    @classmethod
    def empty(cls, plate_format: PlateFormat) -> "PlateGrid":
        """Create a grid of default (unassigned) wells."""
        return cls(plate_format, (Well(id=well_id) for well_id in plate_format.well_ids()))

    @classmethod
    def from_wells(
        cls,
        plate_format: PlateFormat,
        wells: Iterable[Union[Well, Mapping[str, Any]]]
    ) -> "PlateGrid":
        """
        Build a grid from a candidate well list.

        Args:
            plate_format: Plate format the wells must cover
            wells: Well models or persisted well objects

        Returns:
            Grid in row-major order

        Raises:
            LayoutFormatError: wrong well count, invalid well data, unknown,
                duplicate or missing coordinates
        """
        problems: List[str] = []
        parsed: List[Well] = []
        total = 0
        for position, item in enumerate(wells):
            total += 1
            if isinstance(item, Well):
                parsed.append(item)
                continue
            try:
                parsed.append(Well.model_validate(item))
            except ValidationError as e:
                problems.append(f"well #{position}: {e.errors()[0]['msg']}")

        if total != plate_format.size:
            problems.insert(0, f"expected {plate_format.size} wells, got {total}")

        seen: Dict[str, Well] = {}
        for well in parsed:
            if not plate_format.is_valid(well.id):
                problems.append(f"unknown well id: {well.id}")
            elif well.id in seen:
                problems.append(f"duplicate well id: {well.id}")
            else:
                seen[well.id] = well

        missing = [well_id for well_id in plate_format.well_ids() if well_id not in seen]
        if missing:
            problems.append(f"missing well ids: {', '.join(missing)}")

        if problems:
            logger.warning("Rejected layout: %s", "; ".join(problems))
            raise LayoutFormatError(
                f"layout does not match the {plate_format.size}-well plate format",
                problems
            )

        return cls(plate_format, (seen[well_id] for well_id in plate_format.well_ids()))

    @property
    def wells(self) -> Tuple[Well, ...]:
        return self._wells

    @property
    def ids(self) -> List[str]:
        return [w.id for w in self._wells]

    def get(self, well_id: str) -> Optional[Well]:
        """Look up a well by id."""
        return self._index.get(well_id)

    def __getitem__(self, well_id: str) -> Well:
        well = self._index.get(well_id)
        if well is None:
            raise InvalidCoordinateError(well_id)
        return well

    def __contains__(self, well_id: str) -> bool:
        return well_id in self._index

    def __iter__(self) -> Iterator[Well]:
        return iter(self._wells)

    def __len__(self) -> int:
        return len(self._wells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlateGrid):
            return NotImplemented
        return self.plate_format == other.plate_format and self._wells == other._wells

    def __repr__(self) -> str:
        return f"PlateGrid({self.plate_format.rows}x{self.plate_format.cols})"

    def replace(self, updates: Mapping[str, Mapping[str, Any]]) -> "PlateGrid":
        """
        Derive a new grid with partial well updates applied.

        Args:
            updates: Well id -> field-name values to overwrite

        Returns:
            New grid; wells without updates are shared with this one

        Raises:
            InvalidCoordinateError: an update targets a well not on the plate
        """
        for well_id in updates:
            if well_id not in self._index:
                raise InvalidCoordinateError(well_id)

        new_wells = []
        for well in self._wells:
            changes = updates.get(well.id)
            if changes:
                data = well.model_dump()
                data.update(changes)
                new_wells.append(Well.model_validate(data))
            else:
                new_wells.append(well)
        return PlateGrid(self.plate_format, new_wells)

    def max_concentration(self) -> float:
        return max((w.concentration for w in self._wells), default=0.0)

    def to_records(self) -> List[dict]:
        """Serialize to the persisted layout format, in grid order."""
        return [w.to_record() for w in self._wells]


def well_range(start_id: str, end_id: str, plate_format: PlateFormat) -> Optional[List[str]]:
    """
    Well ids on the straight line from start to end, inclusive.

    Both directions are supported. Returns None when the wells are not on a
    single row or column, or when either id is not on the plate.
    """
    try:
        start_row, start_col = plate_format.parse(start_id)
        end_row, end_col = plate_format.parse(end_id)
    except InvalidCoordinateError:
        return None

    if start_row == end_row:
        step = 1 if start_col <= end_col else -1
        return [
            plate_format.coordinate(start_row, col)
            for col in range(start_col, end_col + step, step)
        ]

    if start_col == end_col:
        step = 1 if start_row <= end_row else -1
        return [
            plate_format.coordinate(row, start_col)
            for row in range(start_row, end_row + step, step)
        ]

    return None
