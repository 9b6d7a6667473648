"""Generator request and config models."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from platecrafter.models.well import ConcentrationUnit


class ScaleMode(str, Enum):
    """Concentration spacing of a dilution series."""
    LOG = "log"
    LINEAR = "linear"


class DilutionRequest(BaseModel):
    """Serial dilution across a straight line of wells."""
    start_id: Optional[str] = None  # defaults to the selected pair
    end_id: Optional[str] = None
    compound: str = ""
    mw: float = Field(default=0.0, ge=0)
    scale: ScaleMode = ScaleMode.LOG
    start_concentration: float = Field(default=100.0, ge=0)
    factor: float = 2.0  # log mode, e.g. 2 for 1:2
    end_concentration: float = Field(default=1.0, ge=0)  # linear mode
    unit: ConcentrationUnit = ConcentrationUnit.MOLAR


class CheckerboardRequest(BaseModel):
    """Two-drug checkerboard titration input."""
    drug_a: str = "Drug A"
    conc_a: float = Field(default=100.0, ge=0)  # highest final concentration
    mw_a: float = Field(default=0.0, ge=0)
    unit_a: ConcentrationUnit = ConcentrationUnit.MOLAR
    drug_b: str = "Drug B"
    conc_b: float = Field(default=50.0, ge=0)
    mw_b: float = Field(default=0.0, ge=0)
    unit_b: ConcentrationUnit = ConcentrationUnit.MOLAR
    factor: float = Field(default=2.0, gt=0)
    color_a: str = "#3b82f6"
    color_b: str = "#ef4444"

    @property
    def combination_name(self) -> str:
        return f"{self.drug_a} + {self.drug_b}"


class CheckerboardConfig(BaseModel):
    """
    Derived description of a generated checkerboard.

    Concentrations are in µM. Used to reinterpret combination wells, whose
    drug B concentration is not stored on the well.
    """
    drug_a_name: str
    drug_b_name: str
    max_conc_a: float
    max_conc_b: float
    factor: float
    color_a: str
    color_b: str
    mw_a: float = 0.0
    mw_b: float = 0.0

    @property
    def combination_name(self) -> str:
        return f"{self.drug_a_name} + {self.drug_b_name}"
