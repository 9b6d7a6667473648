"""Selection of active wells."""
import re
from enum import Enum
from typing import List, Optional, Tuple

from platecrafter.errors import SelectionError


class SelectionMode(str, Enum):
    """How a click updates the selection."""
    REPLACE = "replace"
    RANGE = "range"  # shift-click
    TOGGLE = "toggle"  # ctrl/cmd-click


def natural_key(well_id: str) -> list:
    """Sort key that orders "A2" before "A10"."""
    return [int(part) if part.isdigit() else part.lower() for part in re.split(r"(\d+)", well_id)]


class Selection:
    """
    Mutable set of selected well ids.

    Insertion order is kept because the dilution tool infers its direction
    from the selected pair.
    """

    def __init__(self, ids: Optional[List[str]] = None):
        self._ids: List[str] = []
        for well_id in ids or []:
            if well_id not in self._ids:
                self._ids.append(well_id)

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    def __contains__(self, well_id: str) -> bool:
        return well_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self):
        return iter(list(self._ids))

    def replace(self, well_id: str) -> None:
        self._ids = [well_id]

    def toggle(self, well_id: str) -> None:
        if well_id in self._ids:
            self._ids.remove(well_id)
        else:
            self._ids.append(well_id)

    def range_toggle(self, well_id: str) -> None:
        # Same as toggle; only the UI gesture differs
        self.toggle(well_id)

    def select(self, well_id: str, mode: SelectionMode = SelectionMode.REPLACE) -> None:
        """Apply a click in the given mode. A resulting pair is put in natural order."""
        mode = SelectionMode(mode)
        if mode == SelectionMode.REPLACE:
            self.replace(well_id)
        elif mode == SelectionMode.RANGE:
            self.range_toggle(well_id)
        else:
            self.toggle(well_id)
        if len(self._ids) == 2:
            self._ids.sort(key=natural_key)

    def clear(self) -> None:
        self._ids = []

    def endpoints(self) -> Optional[Tuple[str, str]]:
        """
        The selected pair as (start, end), or None unless exactly two wells
        are selected.
        """
        if len(self._ids) != 2:
            return None
        return tuple(self._ids)

    def set_direction(self, start_id: str, end_id: str) -> None:
        """Order the selected pair as start -> end.

        Raises:
            SelectionError: start and end are not the two selected wells
        """
        if sorted(self._ids) != sorted([start_id, end_id]):
            raise SelectionError("direction must use the two selected wells")
        self._ids = [start_id, end_id]
