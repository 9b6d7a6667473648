"""Plate layout and view data models."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from platecrafter.models.generators import CheckerboardConfig
from platecrafter.models.well import ConcentrationUnit, Well


class PlateView(str, Enum):
    """What a rendered well shows."""
    COMPOUND = "Compound"
    CONCENTRATION = "Concentration"
    CONTROL = "Control"
    REPLICATE = "Replicate"


class Theme(str, Enum):
    """Display theme. Publication switches to the grayscale palette."""
    LIGHT = "light"
    DARK = "dark"
    PUBLICATION = "publication"


class PlateState(BaseModel):
    """Current session state: the visible grid plus edit context."""
    wells: List[Well]
    selection: List[str] = []
    can_undo: bool = False
    can_redo: bool = False
    history_index: int = 0
    history_length: int = 1
    checkerboard: Optional[CheckerboardConfig] = None


class CheckerboardResult(BaseModel):
    """Checkerboard generation output."""
    state: PlateState
    config: CheckerboardConfig
    protocol: str


class WellView(BaseModel):
    """Render data for one well."""
    id: str
    label: str = ""
    color: Optional[str] = None  # None = neutral default
    text_color: str = "#000000"
    border_color: Optional[str] = None
    selected: bool = False
    tooltip: List[str] = []


class PlateRender(BaseModel):
    """Render data for a whole plate, in grid order."""
    view: PlateView
    theme: Theme
    unit: ConcentrationUnit
    max_concentration: float = 0.0
    wells: List[WellView]
