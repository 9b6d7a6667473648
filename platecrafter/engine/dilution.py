"""Serial dilution series generator."""
import logging
from typing import List

from platecrafter.engine.grid import PlateGrid, well_range
from platecrafter.engine.units import to_micromolar
from platecrafter.errors import InvalidRangeError, SelectionError
from platecrafter.models import DilutionRequest, ScaleMode

logger = logging.getLogger(__name__)


def diluted(start: float, factor: float, steps: int) -> float:
    """
    Concentration after `steps` serial dilutions by `factor`.

    A non-positive factor leaves only step 0 filled; a factor whose power
    exceeds the float range dilutes to 0.
    """
    if factor <= 0:
        return start if steps == 0 else 0.0
    try:
        return start / factor ** steps
    except OverflowError:
        return 0.0


def dilution_series(
    num_wells: int,
    scale: ScaleMode,
    start: float,
    factor: float = 2.0,
    end: float = 0.0
) -> List[float]:
    """
    Concentrations along a line of wells.

    Args:
        num_wells: Number of wells in the line
        scale: LOG divides by `factor` per step; LINEAR interpolates start to end
        start: First concentration
        factor: Dilution factor (log mode). A non-positive factor leaves only
            the first well filled.
        end: Last concentration (linear mode)

    Returns:
        One concentration per well, in line order
    """
    if ScaleMode(scale) == ScaleMode.LOG:
        return [diluted(start, factor, i) for i in range(num_wells)]

    if num_wells == 1:
        return [start]
    return [start + (end - start) * i / (num_wells - 1) for i in range(num_wells)]


def generate_dilution(grid: PlateGrid, request: DilutionRequest) -> PlateGrid:
    """
    Fill a row or column segment with a dilution series.

    Only compound, concentration and molecular weight of the line's wells
    change. The returned grid is meant to be committed as one history entry.

    Raises:
        InvalidRangeError: start and end are not on a single row or column
        SelectionError: start or end well missing
        MissingMolecularWeightError: mass units without a molecular weight
    """
    if not request.start_id or not request.end_id:
        raise SelectionError("select the start and end wells of a row or column")

    well_ids = well_range(request.start_id, request.end_id, grid.plate_format)
    if well_ids is None:
        raise InvalidRangeError(request.start_id, request.end_id)

    start = to_micromolar(request.start_concentration, request.unit, request.mw)
    end = to_micromolar(request.end_concentration, request.unit, request.mw)

    concentrations = dilution_series(
        len(well_ids), request.scale, start, factor=request.factor, end=end
    )
    updates = {
        well_id: {
            "compound": request.compound,
            "concentration": concentration,
            "mw": request.mw,
            "drug_slot": None,
        }
        for well_id, concentration in zip(well_ids, concentrations)
    }

    logger.info(
        "Dilution %s -> %s: %d wells, %s scale, %s",
        request.start_id, request.end_id, len(well_ids), request.scale.value, request.compound or "-"
    )
    return grid.replace(updates)
