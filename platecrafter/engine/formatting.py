"""Display formatting for concentrations."""
from platecrafter.engine.units import molar_to_mass
from platecrafter.models import ConcentrationUnit

MOLAR_UNITS = ("µM", "nM", "pM")
MASS_UNITS = ("µg/mL", "ng/mL", "pg/mL")


def _auto_scale(value: float, units: tuple) -> str:
    # Step down while the value is below 1 and a smaller unit remains
    unit_index = 0
    while 0 < value < 1 and unit_index < len(units) - 1:
        value *= 1000
        unit_index += 1
    return f"{value:.2f} {units[unit_index]}"


def format_concentration(value_um: float, mw: float, unit: ConcentrationUnit) -> str:
    """
    Format a stored µM concentration for display.

    Args:
        value_um: Concentration in µM
        mw: Molecular weight (g/mol), needed for mass units
        unit: Display unit system

    Returns:
        e.g. "1.23 µM", "5.00 nM", "0.18 µg/mL". Empty for non-positive
        values, "N/A" for mass units without a molecular weight.
    """
    if value_um <= 0:
        return ""
    if ConcentrationUnit(unit) == ConcentrationUnit.MOLAR:
        return _auto_scale(value_um, MOLAR_UNITS)
    if mw <= 0:
        return "N/A"
    return _auto_scale(molar_to_mass(value_um, mw), MASS_UNITS)


def format_molecular_weight(mw: float) -> str:
    return f"{mw:g} g/mol" if mw > 0 else "N/A"


def unit_symbol(unit: ConcentrationUnit) -> str:
    """Base symbol of a unit system."""
    return MOLAR_UNITS[0] if ConcentrationUnit(unit) == ConcentrationUnit.MOLAR else MASS_UNITS[0]
