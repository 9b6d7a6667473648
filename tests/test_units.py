"""Tests for unit conversion and concentration formatting."""
import pytest

from platecrafter.engine import (
    format_concentration, format_molecular_weight, from_micromolar,
    mass_to_molar, molar_to_mass, to_micromolar
)
from platecrafter.errors import MissingMolecularWeightError
from platecrafter.models import ConcentrationUnit


class TestConversion:
    """Molar <-> mass conversion."""

    def test_mass_to_molar(self):
        # 18 µg/mL of glucose-like 180 g/mol compound is 100 µM
        assert mass_to_molar(18, 180) == pytest.approx(100)

    def test_molar_to_mass(self):
        assert molar_to_mass(100, 180) == pytest.approx(18)

    @pytest.mark.parametrize("mw", [0, -5])
    def test_non_positive_mw_yields_zero(self, mw):
        assert mass_to_molar(10, mw) == 0
        assert molar_to_mass(10, mw) == 0

    def test_round_trip(self):
        value_um = 12.5
        mass = from_micromolar(value_um, ConcentrationUnit.MASS, 250)
        assert to_micromolar(mass, ConcentrationUnit.MASS, 250) == pytest.approx(value_um)

    def test_molar_is_identity(self):
        assert to_micromolar(42.0, ConcentrationUnit.MOLAR, 0) == 42.0
        assert from_micromolar(42.0, ConcentrationUnit.MOLAR, 0) == 42.0

    def test_mass_entry_requires_mw(self):
        with pytest.raises(MissingMolecularWeightError, match="molecular weight required"):
            to_micromolar(10, ConcentrationUnit.MASS, 0)


class TestFormatting:
    """Auto-scaled display strings."""

    def test_micromolar(self):
        assert format_concentration(1.5, 0, ConcentrationUnit.MOLAR) == "1.50 µM"

    def test_scales_down_to_nanomolar(self):
        assert format_concentration(0.5, 0, ConcentrationUnit.MOLAR) == "500.00 nM"

    def test_scales_down_to_picomolar(self):
        assert format_concentration(0.0005, 0, ConcentrationUnit.MOLAR) == "500.00 pM"

    def test_stops_at_smallest_unit(self):
        assert format_concentration(5e-7, 0, ConcentrationUnit.MOLAR) == "0.50 pM"

    def test_zero_is_empty(self):
        assert format_concentration(0, 180, ConcentrationUnit.MOLAR) == ""
        assert format_concentration(0, 180, ConcentrationUnit.MASS) == ""

    def test_mass_units(self):
        assert format_concentration(100, 180, ConcentrationUnit.MASS) == "18.00 µg/mL"
        assert format_concentration(1, 180, ConcentrationUnit.MASS) == "180.00 ng/mL"

    def test_mass_without_mw(self):
        assert format_concentration(100, 0, ConcentrationUnit.MASS) == "N/A"

    def test_molecular_weight(self):
        assert format_molecular_weight(180.157) == "180.157 g/mol"
        assert format_molecular_weight(0) == "N/A"


MASS_SCALE = {"µg/mL": 1, "ng/mL": 1e-3, "pg/mL": 1e-6}
MOLAR_SCALE = {"µM": 1, "nM": 1e-3, "pM": 1e-6}


def parse_display(text, scale):
    """Read a formatted concentration back in its base unit."""
    number, unit = text.split(" ")
    return float(number) * scale[unit]


class TestDisplayRoundTrip:
    """Formatting a stored value and reading it back."""

    @pytest.mark.parametrize("value_um", [250, 12.5, 1.004, 0.73, 0.0042, 3.3e-5])
    @pytest.mark.parametrize("mw", [180.157, 46.07, 1202.6])
    def test_mass_display_reproduces_stored_value(self, value_um, mw):
        text = format_concentration(value_um, mw, ConcentrationUnit.MASS)
        mass = parse_display(text, MASS_SCALE)
        back = to_micromolar(mass, ConcentrationUnit.MASS, mw)
        # Two decimals on a value auto-scaled to >= 1
        assert back == pytest.approx(value_um, rel=6e-3)

    @pytest.mark.parametrize("value_um", [250, 12.5, 1.004, 0.73, 0.0042, 3.3e-5])
    def test_molar_display_reproduces_stored_value(self, value_um):
        text = format_concentration(value_um, 0, ConcentrationUnit.MOLAR)
        assert parse_display(text, MOLAR_SCALE) == pytest.approx(value_um, rel=6e-3)
