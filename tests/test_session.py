"""Tests for the plate editing session."""
import pytest

from platecrafter.engine import PlateGrid, SelectionMode
from platecrafter.errors import (
    InvalidCoordinateError, MissingMolecularWeightError, SelectionError
)
from platecrafter.models import (
    PLATE_384_WELL, ConcentrationUnit, ControlType, DilutionRequest, DrugSlot, WellUpdate
)
from platecrafter.services import LayoutService, RenderService


class TestWellEdits:
    """Single, multi and batch edits."""

    def test_update_well(self, session):
        session.update_well("B3", WellUpdate(compound="Aspirin", concentration=12.5))
        well = session.grid["B3"]
        assert well.compound == "Aspirin"
        assert well.concentration == 12.5
        assert session.history.can_undo

    def test_partial_update_keeps_other_fields(self, session):
        session.update_well("B3", WellUpdate(compound="Aspirin", strain="E. coli"))
        session.update_well("B3", WellUpdate(replicate_group=2))
        well = session.grid["B3"]
        assert well.compound == "Aspirin"
        assert well.strain == "E. coli"
        assert well.replicate_group == 2

    def test_update_wells_is_one_undo_step(self, session):
        session.update_wells(["A1", "A2", "A3"], WellUpdate(control_type=ControlType.BLANK))
        assert all(session.grid[w].control_type == ControlType.BLANK for w in ("A1", "A2", "A3"))
        assert len(session.history) == 2

        session.undo()
        assert session.grid["A2"].control_type == ControlType.NONE

    def test_batch_update(self, session):
        session.batch_update({
            "A1": WellUpdate(compound="X", concentration=1),
            "H12": WellUpdate(compound="Y", concentration=2),
        })
        assert session.grid["A1"].compound == "X"
        assert session.grid["H12"].concentration == 2
        assert len(session.history) == 2

    def test_mass_units_use_update_mw(self, session):
        session.update_well(
            "A1", WellUpdate(concentration=18, mw=180), unit=ConcentrationUnit.MASS
        )
        assert session.grid["A1"].concentration == pytest.approx(100)
        assert session.grid["A1"].mw == 180

    def test_mass_units_use_stored_mw(self, session):
        session.update_well("A1", WellUpdate(mw=200))
        session.update_well("A1", WellUpdate(concentration=20), unit=ConcentrationUnit.MASS)
        assert session.grid["A1"].concentration == pytest.approx(100)

    def test_mass_units_without_mw(self, session):
        with pytest.raises(MissingMolecularWeightError, match="A1"):
            session.update_well("A1", WellUpdate(concentration=5), unit=ConcentrationUnit.MASS)
        # Nothing committed
        assert len(session.history) == 1

    def test_zero_mass_concentration_needs_no_mw(self, session):
        session.update_well("A1", WellUpdate(concentration=0), unit=ConcentrationUnit.MASS)
        assert session.grid["A1"].concentration == 0

    def test_unknown_well(self, session):
        with pytest.raises(InvalidCoordinateError):
            session.batch_update({"A1": WellUpdate(compound="X"), "Z1": WellUpdate(compound="Y")})
        assert session.grid["A1"].compound == ""
        assert len(session.history) == 1

    def test_renaming_clears_checkerboard_tag(self, session, checkerboard_request):
        session.apply_checkerboard(checkerboard_request)
        session.update_well("A1", WellUpdate(concentration=5))
        assert session.grid["A1"].drug_slot == DrugSlot.A

        session.update_well("A1", WellUpdate(compound="Other"))
        assert session.grid["A1"].drug_slot is None


class TestHistory:
    """Undo, redo and reset through the session."""

    def test_undo_redo(self, session):
        session.update_well("A1", WellUpdate(compound="X"))
        session.undo()
        assert session.grid["A1"].compound == ""
        session.redo()
        assert session.grid["A1"].compound == "X"

    def test_reset(self, session, checkerboard_request):
        session.apply_checkerboard(checkerboard_request)
        session.select("A1")
        session.reset()

        assert session.grid == PlateGrid.empty(session.plate_format)
        assert session.checkerboard is None
        assert session.selection.ids == []
        assert not session.history.can_undo

    def test_state(self, session):
        session.update_well("A1", WellUpdate(compound="X"))
        state = session.state()
        assert len(state.wells) == 96
        assert state.can_undo and not state.can_redo
        assert state.history_index == 1
        assert state.history_length == 2


class TestPlateData:
    """Whole-layout replacement."""

    def test_set_plate_data(self, session, plate_format):
        session.select("A1")
        grid = PlateGrid.empty(plate_format).replace({"C3": {"compound": "Loaded"}})
        session.set_plate_data(grid)

        assert session.grid["C3"].compound == "Loaded"
        assert session.selection.ids == []
        session.undo()
        assert session.grid["C3"].compound == ""

    def test_other_format_rejected(self, session):
        with pytest.raises(ValueError):
            session.set_plate_data(PlateGrid.empty(PLATE_384_WELL))

    def test_new_layout_drops_checkerboard(self, session, checkerboard_request, plate_format):
        session.apply_checkerboard(checkerboard_request)
        assert session.checkerboard is not None
        session.set_plate_data(PlateGrid.empty(plate_format))
        assert session.checkerboard is None


class TestGenerators:
    """Dilution and checkerboard through the session."""

    def test_dilution_from_selection(self, session):
        session.select("A1")
        session.select("A4", SelectionMode.TOGGLE)
        session.apply_dilution(DilutionRequest(compound="X", start_concentration=8))

        assert [session.grid[f"A{c}"].concentration for c in range(1, 5)] == [8, 4, 2, 1]
        assert len(session.history) == 2

    def test_dilution_reversed_selection(self, session):
        session.select("A1")
        session.select("A4", SelectionMode.TOGGLE)
        session.set_direction("A4", "A1")
        session.apply_dilution(DilutionRequest(start_concentration=8))
        assert session.grid["A4"].concentration == 8
        assert session.grid["A1"].concentration == 1

    def test_dilution_without_selection(self, session):
        with pytest.raises(SelectionError):
            session.apply_dilution(DilutionRequest())

    def test_set_direction_with_other_wells(self, session):
        session.select("A1")
        with pytest.raises(SelectionError):
            session.set_direction("A1", "A2")

    def test_select_unknown_well(self, session):
        with pytest.raises(InvalidCoordinateError):
            session.select("Z1")

    def test_checkerboard(self, session, checkerboard_request):
        config, protocol = session.apply_checkerboard(checkerboard_request)

        assert session.checkerboard == config
        assert session.grid["H1"].control_type == ControlType.POSITIVE
        assert "Ampicillin" in protocol
        assert len(session.history) == 2

    def test_undo_checkerboard_keeps_undo_linear(self, session, checkerboard_request):
        session.apply_checkerboard(checkerboard_request)
        session.undo()
        assert session.grid == PlateGrid.empty(session.plate_format)


class TestCheckerboardHistory:
    """The checkerboard config follows undo and redo."""

    def test_undo_layout_replacement_restores_checkerboard(
        self, session, checkerboard_request, layout_records
    ):
        config, _ = session.apply_checkerboard(checkerboard_request)
        renderer = RenderService()
        before = renderer.render(session.grid, checkerboard=session.checkerboard).wells

        session.set_plate_data(LayoutService(session.plate_format).parse_layout(layout_records))
        assert session.checkerboard is None

        session.undo()
        assert session.checkerboard == config
        assert session.state().checkerboard == config
        after = renderer.render(session.grid, checkerboard=session.checkerboard).wells

        g12 = session.plate_format.well_ids().index("G12")
        assert after[g12].color == before[g12].color == "#de91a1"
        assert "Conc (Colistin): 50.00 µM" in after[g12].tooltip

        session.redo()
        assert session.checkerboard is None

    def test_well_edits_keep_checkerboard(self, session, checkerboard_request):
        config, _ = session.apply_checkerboard(checkerboard_request)
        session.update_well("B5", WellUpdate(strain="E. coli"))
        session.apply_dilution(DilutionRequest(start_id="A1", end_id="A3", compound="Other"))
        assert session.checkerboard == config

        session.undo()
        session.undo()
        assert session.checkerboard == config

    def test_undo_before_checkerboard(self, session, checkerboard_request):
        session.apply_checkerboard(checkerboard_request)
        session.undo()
        assert session.checkerboard is None
