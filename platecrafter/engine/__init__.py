"""Plate layout engine."""
from platecrafter.engine.grid import PlateGrid, well_range
from platecrafter.engine.history import HistoryStore
from platecrafter.engine.selection import Selection, SelectionMode
from platecrafter.engine.units import (
    mass_to_molar, molar_to_mass, to_micromolar, from_micromolar
)
from platecrafter.engine.formatting import format_concentration, format_molecular_weight
from platecrafter.engine.dilution import dilution_series, generate_dilution
from platecrafter.engine.checkerboard import (
    GROWTH_CONTROL_LABEL, generate_checkerboard, classify_well, combination_concentrations
)
from platecrafter.engine.colors import (
    linear_scale_color, checkerboard_well_color, palette_index, contrasting_text_color
)
from platecrafter.engine.protocol import generate_protocol_text

__all__ = [
    "PlateGrid", "well_range", "HistoryStore", "Selection", "SelectionMode",
    "mass_to_molar", "molar_to_mass", "to_micromolar", "from_micromolar",
    "format_concentration", "format_molecular_weight",
    "dilution_series", "generate_dilution",
    "GROWTH_CONTROL_LABEL", "generate_checkerboard", "classify_well", "combination_concentrations",
    "linear_scale_color", "checkerboard_well_color", "palette_index", "contrasting_text_color",
    "generate_protocol_text",
]
