"""Data models for PlateCrafter."""
from platecrafter.models.well import (
    Well,
    WellUpdate,
    ControlType,
    ConcentrationUnit,
    DrugSlot,
)
from platecrafter.models.plate import (
    PlateFormat,
    PlateType,
    PLATE_96_WELL,
    PLATE_384_WELL,
    PLATE_FORMATS,
    get_plate_format,
)
from platecrafter.models.generators import (
    DilutionRequest,
    ScaleMode,
    CheckerboardRequest,
    CheckerboardConfig,
)
from platecrafter.models.plate_layout import (
    PlateView,
    Theme,
    PlateState,
    CheckerboardResult,
    WellView,
    PlateRender,
)

__all__ = [
    "Well", "WellUpdate", "ControlType", "ConcentrationUnit", "DrugSlot",
    "PlateFormat", "PlateType", "PLATE_96_WELL", "PLATE_384_WELL", "PLATE_FORMATS",
    "get_plate_format",
    "DilutionRequest", "ScaleMode", "CheckerboardRequest", "CheckerboardConfig",
    "PlateView", "Theme", "PlateState", "CheckerboardResult", "WellView", "PlateRender",
]
