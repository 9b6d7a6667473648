"""Linear undo/redo history over whole-grid snapshots."""
import logging
from typing import List, NamedTuple, Optional

from platecrafter.engine.grid import PlateGrid
from platecrafter.models import CheckerboardConfig

logger = logging.getLogger(__name__)


class Snapshot(NamedTuple):
    """One history entry: the grid plus the checkerboard it was generated from, if any."""
    grid: PlateGrid
    checkerboard: Optional[CheckerboardConfig] = None


class HistoryStore:
    """
    Snapshot history with a cursor.

    Every edit commits a complete grid. Committing after an undo discards the
    redo branch, so the history stays linear. The checkerboard config is stored
    with its grid and restored with it.
    """

    def __init__(self, initial: PlateGrid, checkerboard: Optional[CheckerboardConfig] = None):
        self._entries: List[Snapshot] = [Snapshot(initial, checkerboard)]
        self._cursor = 0

    @property
    def current(self) -> PlateGrid:
        return self._entries[self._cursor].grid

    @property
    def checkerboard(self) -> Optional[CheckerboardConfig]:
        return self._entries[self._cursor].checkerboard

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)

    def commit(
        self,
        grid: PlateGrid,
        checkerboard: Optional[CheckerboardConfig] = None
    ) -> PlateGrid:
        """Append a snapshot after the cursor, dropping any redo entries."""
        dropped = len(self._entries) - self._cursor - 1
        del self._entries[self._cursor + 1:]
        self._entries.append(Snapshot(grid, checkerboard))
        self._cursor = len(self._entries) - 1
        logger.debug("Committed history entry %d (dropped %d redo entries)", self._cursor, dropped)
        return grid

    def undo(self) -> PlateGrid:
        if self.can_undo:
            self._cursor -= 1
            logger.debug("Undo to history entry %d", self._cursor)
        return self.current

    def redo(self) -> PlateGrid:
        if self.can_redo:
            self._cursor += 1
            logger.debug("Redo to history entry %d", self._cursor)
        return self.current

    def reset(self, grid: PlateGrid) -> PlateGrid:
        """Start a fresh history at `grid`."""
        self._entries = [Snapshot(grid)]
        self._cursor = 0
        return grid
