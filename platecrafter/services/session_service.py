"""Plate editing session: the single mutation surface of the plate."""
import logging
from typing import Dict, List, Mapping, Optional, Tuple

from platecrafter.engine import (
    HistoryStore, PlateGrid, Selection, SelectionMode,
    generate_checkerboard, generate_dilution, generate_protocol_text, to_micromolar
)
from platecrafter.errors import InvalidCoordinateError, SelectionError
from platecrafter.models import (
    CheckerboardConfig, CheckerboardRequest, ConcentrationUnit, DilutionRequest,
    PlateFormat, PlateState, Well, WellUpdate
)

logger = logging.getLogger(__name__)


class SessionService:
    """
    In-memory plate session.

    Every edit derives a complete grid from the current one and commits it as
    one history entry. Errors are raised before the commit, so a failed edit
    never leaves a partial grid behind.
    """

    def __init__(self, plate_format: PlateFormat):
        self.plate_format = plate_format
        self.history = HistoryStore(PlateGrid.empty(plate_format))
        self.selection = Selection()

    @property
    def grid(self) -> PlateGrid:
        return self.history.current

    @property
    def checkerboard(self) -> Optional[CheckerboardConfig]:
        """Config of the checkerboard the current grid was generated from."""
        return self.history.checkerboard

    def state(self) -> PlateState:
        """Snapshot of the session for API responses."""
        return PlateState(
            wells=list(self.grid.wells),
            selection=self.selection.ids,
            can_undo=self.history.can_undo,
            can_redo=self.history.can_redo,
            history_index=self.history.cursor,
            history_length=len(self.history),
            checkerboard=self.checkerboard,
        )

    # Well edits

    def _resolve_changes(
        self,
        well: Well,
        update: WellUpdate,
        unit: ConcentrationUnit
    ) -> dict:
        """Turn a partial update in display units into stored field values."""
        changes = update.model_dump(exclude_unset=True)
        if changes.get("compound") is not None and changes["compound"] != well.compound:
            # The well no longer belongs to a generated checkerboard
            changes["drug_slot"] = None
        if update.concentration == 0:
            changes["concentration"] = 0.0
        elif update.concentration is not None:
            mw = update.mw if update.mw is not None else well.mw
            changes["concentration"] = to_micromolar(
                update.concentration, unit, mw, subject=well.id
            )
        return {key: value for key, value in changes.items() if value is not None or key == "drug_slot"}

    def batch_update(
        self,
        updates: Mapping[str, WellUpdate],
        unit: ConcentrationUnit = ConcentrationUnit.MOLAR
    ) -> PlateGrid:
        """
        Apply per-well updates as one history entry.

        Raises:
            InvalidCoordinateError: an id is not on the plate
            MissingMolecularWeightError: mass concentration without MW
        """
        grid = self.grid
        changes: Dict[str, dict] = {}
        for well_id, update in updates.items():
            well = grid.get(well_id)
            if well is None:
                raise InvalidCoordinateError(well_id)
            changes[well_id] = self._resolve_changes(well, update, unit)

        new_grid = self.history.commit(grid.replace(changes), self.checkerboard)
        logger.info("Updated %d well(s)", len(changes))
        return new_grid

    def update_well(
        self,
        well_id: str,
        update: WellUpdate,
        unit: ConcentrationUnit = ConcentrationUnit.MOLAR
    ) -> PlateGrid:
        return self.batch_update({well_id: update}, unit)

    def update_wells(
        self,
        well_ids: List[str],
        update: WellUpdate,
        unit: ConcentrationUnit = ConcentrationUnit.MOLAR
    ) -> PlateGrid:
        """Apply the same update to several wells as one history entry."""
        return self.batch_update({well_id: update for well_id in well_ids}, unit)

    def set_plate_data(
        self,
        grid: PlateGrid,
        checkerboard: Optional[CheckerboardConfig] = None
    ) -> PlateGrid:
        """Replace the whole grid. Clears the selection."""
        if grid.plate_format != self.plate_format:
            raise ValueError("layout uses a different plate format")
        self.history.commit(grid, checkerboard)
        self.selection.clear()
        logger.info("Replaced plate layout")
        return grid

    # History

    def undo(self) -> PlateGrid:
        return self.history.undo()

    def redo(self) -> PlateGrid:
        return self.history.redo()

    def reset(self) -> PlateGrid:
        """Start over with an empty plate and a fresh history."""
        self.selection.clear()
        logger.info("Reset plate session")
        return self.history.reset(PlateGrid.empty(self.plate_format))

    # Selection

    def select(self, well_id: str, mode: SelectionMode = SelectionMode.REPLACE) -> List[str]:
        if well_id not in self.grid:
            raise InvalidCoordinateError(well_id)
        self.selection.select(well_id, mode)
        return self.selection.ids

    def set_direction(self, start_id: str, end_id: str) -> List[str]:
        self.selection.set_direction(start_id, end_id)
        return self.selection.ids

    def clear_selection(self) -> None:
        self.selection.clear()

    # Generators

    def apply_dilution(self, request: DilutionRequest) -> PlateGrid:
        """
        Run a serial dilution and commit it as one history entry.

        Start and end default to the selected pair of wells.
        """
        if request.start_id is None or request.end_id is None:
            endpoints = self.selection.endpoints()
            if endpoints is None:
                raise SelectionError("select the start and end wells of a row or column")
            request = request.model_copy(update={"start_id": endpoints[0], "end_id": endpoints[1]})

        return self.history.commit(generate_dilution(self.grid, request), self.checkerboard)

    def apply_checkerboard(self, request: CheckerboardRequest) -> Tuple[CheckerboardConfig, str]:
        """
        Replace the plate with a checkerboard layout.

        Returns:
            (derived config, protocol document)
        """
        grid, config = generate_checkerboard(request, self.plate_format)
        protocol = generate_protocol_text(request)
        self.set_plate_data(grid, checkerboard=config)
        return config, protocol
