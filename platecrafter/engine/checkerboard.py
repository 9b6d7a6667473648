"""Two-drug checkerboard titration layout."""
import logging
from typing import Dict, Optional, Tuple

from platecrafter.engine.dilution import diluted
from platecrafter.engine.grid import PlateGrid
from platecrafter.engine.units import to_micromolar
from platecrafter.errors import LayoutFormatError
from platecrafter.models import (
    CheckerboardConfig, CheckerboardRequest, ControlType, DrugSlot,
    PlateFormat, PLATE_96_WELL, Well
)

logger = logging.getLogger(__name__)

GROWTH_CONTROL_LABEL = "Growth Control"


def drug_b_concentration(col_index: int, config: CheckerboardConfig, plate_format: PlateFormat) -> float:
    """Drug B concentration of a column; the last column holds the highest."""
    exponent = (plate_format.cols - 1) - col_index
    return diluted(config.max_conc_b, config.factor, exponent)


def build_config(request: CheckerboardRequest) -> CheckerboardConfig:
    """
    Convert a request to a µM checkerboard config.

    Raises:
        MissingMolecularWeightError: a drug is given in mass units without MW
    """
    max_a = to_micromolar(request.conc_a, request.unit_a, request.mw_a, subject=request.drug_a)
    max_b = to_micromolar(request.conc_b, request.unit_b, request.mw_b, subject=request.drug_b)
    return CheckerboardConfig(
        drug_a_name=request.drug_a,
        drug_b_name=request.drug_b,
        max_conc_a=max_a,
        max_conc_b=max_b,
        factor=request.factor,
        color_a=request.color_a,
        color_b=request.color_b,
        mw_a=request.mw_a,
        mw_b=request.mw_b,
    )


def generate_checkerboard(
    request: CheckerboardRequest,
    plate_format: PlateFormat = PLATE_96_WELL
) -> Tuple[PlateGrid, CheckerboardConfig]:
    """
    Build a complete checkerboard plate.

    Drug A is diluted down the rows above the last one (row A highest) in
    every column. Drug B is diluted across columns 2..N from the last column
    (highest) leftwards; column 1 carries no drug B. The last row holds drug B
    alone and its first well is the growth control. Combination wells store
    drug A's concentration only; drug B's is derived from the column.

    Returns:
        (new grid, derived config). Nothing is committed here.
    """
    if plate_format.rows < 2 or plate_format.cols < 2:
        raise LayoutFormatError("checkerboard needs at least 2 rows and 2 columns")

    config = build_config(request)
    last_row = plate_format.rows - 1
    combo_name = config.combination_name

    wells: Dict[str, Well] = {}
    for row in range(plate_format.rows):
        conc_a = diluted(config.max_conc_a, config.factor, row)
        for col in range(plate_format.cols):
            well_id = plate_format.coordinate(row, col)
            if row < last_row and col == 0:
                well = Well(
                    id=well_id, compound=config.drug_a_name, concentration=conc_a,
                    mw=config.mw_a, drug_slot=DrugSlot.A
                )
            elif row < last_row:
                well = Well(
                    id=well_id, compound=combo_name, concentration=conc_a,
                    mw=config.mw_a, drug_slot=DrugSlot.COMBO
                )
            elif col > 0:
                well = Well(
                    id=well_id, compound=config.drug_b_name,
                    concentration=drug_b_concentration(col, config, plate_format),
                    mw=config.mw_b, drug_slot=DrugSlot.B
                )
            else:
                well = Well(
                    id=well_id, compound=GROWTH_CONTROL_LABEL,
                    control_type=ControlType.POSITIVE
                )
            wells[well_id] = well

    logger.info(
        "Checkerboard %s x %s: max %.4g / %.4g µM, factor %g",
        config.drug_a_name, config.drug_b_name, config.max_conc_a, config.max_conc_b, config.factor
    )
    grid = PlateGrid(plate_format, (wells[well_id] for well_id in plate_format.well_ids()))
    return grid, config


def classify_well(well: Well, config: CheckerboardConfig) -> Optional[DrugSlot]:
    """
    Checkerboard role of a well, or None for wells outside the assay.

    The explicit tag wins; untagged wells (e.g. from imported layouts) are
    matched by compound name.
    """
    if well.drug_slot is not None:
        return well.drug_slot
    if well.compound == config.drug_a_name:
        return DrugSlot.A
    if well.compound == config.drug_b_name:
        return DrugSlot.B
    if well.compound == config.combination_name:
        return DrugSlot.COMBO
    return None


def combination_concentrations(
    well: Well,
    config: CheckerboardConfig,
    plate_format: PlateFormat
) -> Tuple[float, float]:
    """(drug A, drug B) concentrations of a combination well, in µM."""
    _, col_index = plate_format.parse(well.id)
    return well.concentration, drug_b_concentration(col_index, config, plate_format)
