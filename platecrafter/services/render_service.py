"""Render data for plate views."""
from typing import List, Optional

from platecrafter.engine import PlateGrid, Selection, classify_well, combination_concentrations
from platecrafter.engine.colors import (
    checkerboard_well_color, contrasting_text_color, control_color,
    linear_scale_color, replicate_color
)
from platecrafter.engine.formatting import format_concentration, format_molecular_weight
from platecrafter.models import (
    CheckerboardConfig, ConcentrationUnit, ControlType, DrugSlot, PlateRender,
    PlateView, Theme, Well, WellView
)


class RenderService:
    """Builds per-well labels, colors and tooltips for the plate renderer."""

    def render(
        self,
        grid: PlateGrid,
        view: PlateView = PlateView.CONCENTRATION,
        theme: Theme = Theme.LIGHT,
        unit: ConcentrationUnit = ConcentrationUnit.MOLAR,
        selection: Optional[Selection] = None,
        checkerboard: Optional[CheckerboardConfig] = None
    ) -> PlateRender:
        """
        Render a grid.

        Args:
            grid: Plate to render
            view: What each well shows
            theme: Selects the concentration palette
            unit: Display unit for concentrations
            selection: Selected wells, highlighted
            checkerboard: Config of the generated checkerboard, if any

        Returns:
            PlateRender with one WellView per well, in grid order
        """
        max_conc = grid.max_concentration()
        selected = set(selection.ids) if selection else set()

        wells = []
        for well in grid:
            color = self._well_color(well, grid, view, theme, max_conc, checkerboard)
            border = None
            if view == PlateView.REPLICATE:
                border = replicate_color(well.replicate_group)
            wells.append(WellView(
                id=well.id,
                label=self._well_label(well, view, unit),
                color=color,
                text_color=contrasting_text_color(color),
                border_color=border,
                selected=well.id in selected,
                tooltip=self._tooltip(well, grid, unit, checkerboard),
            ))

        return PlateRender(
            view=view,
            theme=theme,
            unit=unit,
            max_concentration=max_conc,
            wells=wells,
        )

    def _well_color(
        self,
        well: Well,
        grid: PlateGrid,
        view: PlateView,
        theme: Theme,
        max_conc: float,
        checkerboard: Optional[CheckerboardConfig]
    ) -> Optional[str]:
        if view == PlateView.CONTROL:
            return control_color(well.control_type)
        if view != PlateView.CONCENTRATION:
            return None
        if checkerboard:
            color = checkerboard_well_color(well, checkerboard, grid.plate_format)
            if color:
                return color
        return linear_scale_color(well.concentration, max_conc, theme)

    def _well_label(self, well: Well, view: PlateView, unit: ConcentrationUnit) -> str:
        if view == PlateView.COMPOUND:
            return well.compound[:3] or "-"
        if view == PlateView.CONCENTRATION:
            # Number only; the unit is in the tooltip
            return format_concentration(well.concentration, well.mw, unit).split(" ")[0]
        if view == PlateView.CONTROL:
            return well.control_type.value[0] if well.control_type != ControlType.NONE else ""
        if view == PlateView.REPLICATE:
            return f"R{well.replicate_group}" if well.replicate_group > 0 else ""
        return ""

    def _tooltip(
        self,
        well: Well,
        grid: PlateGrid,
        unit: ConcentrationUnit,
        checkerboard: Optional[CheckerboardConfig]
    ) -> List[str]:
        lines = [f"Compound: {well.compound or 'N/A'}"]

        if checkerboard and classify_well(well, checkerboard) == DrugSlot.COMBO:
            conc_a, conc_b = combination_concentrations(well, checkerboard, grid.plate_format)
            name_a, name_b = checkerboard.drug_a_name, checkerboard.drug_b_name
            lines += [
                f"Conc ({name_a}): {format_concentration(conc_a, checkerboard.mw_a, unit) or '0'}",
                f"Conc ({name_b}): {format_concentration(conc_b, checkerboard.mw_b, unit) or '0'}",
                f"MW ({name_a}): {format_molecular_weight(checkerboard.mw_a)}",
                f"MW ({name_b}): {format_molecular_weight(checkerboard.mw_b)}",
            ]
        else:
            lines += [
                f"Conc: {format_concentration(well.concentration, well.mw, unit) or '0'}",
                f"MW: {format_molecular_weight(well.mw)}",
            ]

        lines += [
            f"Strain: {well.strain or 'N/A'}",
            f"Control: {well.control_type.value}",
            f"Replicate: {well.replicate_group or 'N/A'}",
        ]
        return lines
