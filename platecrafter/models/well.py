"""Well data models."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ControlType(str, Enum):
    """Control role of a well."""
    NONE = "None"
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    BLANK = "Blank"


class ConcentrationUnit(str, Enum):
    """Unit system a concentration is entered or displayed in."""
    MOLAR = "molar"  # µM
    MASS = "mass"  # µg/mL


class DrugSlot(str, Enum):
    """Checkerboard role written by the checkerboard generator."""
    A = "A"
    B = "B"
    COMBO = "combo"


class Well(BaseModel):
    """
    One addressable plate position.

    ``concentration`` is always stored in µM. Mass-unit values are derived on
    read and converted back to µM on write.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str  # e.g., "A1"
    compound: str = ""
    concentration: float = Field(default=0.0, ge=0)  # µM
    mw: float = Field(default=0.0, ge=0)  # g/mol, 0 = unknown
    strain: str = ""
    control_type: ControlType = Field(default=ControlType.NONE, alias="controlType")
    replicate_group: int = Field(default=0, ge=0, alias="replicateGroup")
    drug_slot: Optional[DrugSlot] = Field(default=None, alias="drugSlot")

    def to_record(self) -> dict:
        """Serialize to the persisted layout well object."""
        return self.model_dump(by_alias=True, mode="json")


class WellUpdate(BaseModel):
    """Partial well data. Only fields that were set are applied."""
    model_config = ConfigDict(populate_by_name=True)

    compound: Optional[str] = None
    concentration: Optional[float] = Field(default=None, ge=0)  # in `unit`
    mw: Optional[float] = Field(default=None, ge=0)
    strain: Optional[str] = None
    control_type: Optional[ControlType] = Field(default=None, alias="controlType")
    replicate_group: Optional[int] = Field(default=None, ge=0, alias="replicateGroup")
