"""Conversion between molar (µM) and mass (µg/mL) concentrations."""
from typing import Optional

from platecrafter.errors import MissingMolecularWeightError
from platecrafter.models import ConcentrationUnit


def mass_to_molar(value_ug_per_ml: float, mw: float) -> float:
    """
    Convert µg/mL to µM.

    Returns 0 when the molecular weight is not positive; callers treat that as
    "conversion not possible".
    """
    if mw <= 0:
        return 0.0
    return value_ug_per_ml * 1000 / mw


def molar_to_mass(value_um: float, mw: float) -> float:
    """Convert µM to µg/mL. Returns 0 when the molecular weight is not positive."""
    if mw <= 0:
        return 0.0
    return value_um * mw / 1000


def to_micromolar(
    value: float,
    unit: ConcentrationUnit,
    mw: float,
    subject: Optional[str] = None
) -> float:
    """
    Convert a user-entered concentration to the stored µM value.

    Raises:
        MissingMolecularWeightError: for mass units without a positive MW.
    """
    if ConcentrationUnit(unit) == ConcentrationUnit.MOLAR:
        return value
    if mw <= 0:
        raise MissingMolecularWeightError(subject)
    return mass_to_molar(value, mw)


def from_micromolar(value_um: float, unit: ConcentrationUnit, mw: float) -> float:
    """Convert a stored µM value to the display unit."""
    if ConcentrationUnit(unit) == ConcentrationUnit.MOLAR:
        return value_um
    return molar_to_mass(value_um, mw)
