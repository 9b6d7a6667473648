"""Concentration-to-color mapping."""
import math
import re
from typing import Optional, Tuple

from platecrafter.engine.checkerboard import classify_well, combination_concentrations
from platecrafter.models import (
    CheckerboardConfig, ControlType, DrugSlot, PlateFormat, Theme, Well
)

RGB = Tuple[int, int, int]

CONCENTRATION_COLOR_SCALE = (
    "#ffffd9",
    "#edf8b1",
    "#c7e9b4",
    "#7fcdbb",
    "#41b6c4",
    "#1d91c0",
    "#225ea8",
    "#253494",
    "#081d58",
)

PUBLICATION_COLOR_SCALE = (
    "#ffffff",
    "#f0f0f0",
    "#d9d9d9",
    "#bdbdbd",
    "#969696",
    "#737373",
    "#525252",
    "#252525",
    "#000000",
)

CONTROL_COLORS = {
    ControlType.POSITIVE: "#22c55e",
    ControlType.NEGATIVE: "#ef4444",
    ControlType.BLANK: "#d1d5db",
}

REPLICATE_COLORS = (
    "#0ea5e9",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#84cc16",
    "#f43f5e",
)

WHITE: RGB = (255, 255, 255)

# Lowest visible intensity, so the weakest dilution still differs from an empty well
BASE_INTENSITY = 0.25

_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(hex_color: str) -> Optional[RGB]:
    match = _HEX_PATTERN.match(hex_color or "")
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def rgb_to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def interpolate_rgb(start: RGB, end: RGB, factor: float) -> RGB:
    return tuple(_round_half_up(s + factor * (e - s)) for s, e in zip(start, end))


def mix_rgb(first: RGB, second: RGB, weight: float = 0.5) -> RGB:
    return tuple(_round_half_up(a * (1 - weight) + b * weight) for a, b in zip(first, second))


def adjusted_intensity(raw: float) -> float:
    """Remap a raw intensity in [0, 1] onto [BASE_INTENSITY, 1]; 0 stays 0."""
    if raw <= 0:
        return 0.0
    return BASE_INTENSITY + (1 - BASE_INTENSITY) * raw


def get_palette(theme: Theme) -> Tuple[str, ...]:
    if theme == Theme.PUBLICATION:
        return PUBLICATION_COLOR_SCALE
    return CONCENTRATION_COLOR_SCALE


def palette_index(concentration: float, max_concentration: float, size: int) -> int:
    """Index into a palette of `size` colors for a concentration relative to the plate max."""
    ratio = concentration / max_concentration if max_concentration > 0 else 0.0
    return min(math.floor(ratio * size), size - 1)


def linear_scale_color(
    concentration: float,
    max_concentration: float,
    theme: Theme = Theme.LIGHT
) -> Optional[str]:
    """
    Palette color for a concentration, or None for empty wells.

    Args:
        concentration: Well concentration (µM)
        max_concentration: Highest concentration on the plate (µM)
        theme: Active theme, selects the palette

    Returns:
        Hex color, or None when there is nothing to color
    """
    if concentration <= 0 or max_concentration <= 0:
        return None
    palette = get_palette(theme)
    return palette[palette_index(concentration, max_concentration, len(palette))]


def checkerboard_well_color(
    well: Well,
    config: CheckerboardConfig,
    plate_format: PlateFormat
) -> Optional[str]:
    """
    Blend color for a checkerboard well.

    Single-drug wells interpolate that drug's color from white by intensity;
    combination wells average the two interpolated colors. Wells outside the
    checkerboard (controls, user edits) get None so the caller can fall back
    to the linear scale or a neutral default.
    """
    color_a = hex_to_rgb(config.color_a)
    color_b = hex_to_rgb(config.color_b)
    if color_a is None or color_b is None:
        return None

    slot = classify_well(well, config)
    if slot is None:
        return None

    conc_a = conc_b = 0.0
    if slot == DrugSlot.A:
        conc_a = well.concentration
    elif slot == DrugSlot.B:
        conc_b = well.concentration
    else:
        conc_a, conc_b = combination_concentrations(well, config, plate_format)

    raw_a = conc_a / config.max_conc_a if config.max_conc_a > 0 else 0.0
    raw_b = conc_b / config.max_conc_b if config.max_conc_b > 0 else 0.0
    if raw_a <= 0 and raw_b <= 0:
        return None

    shade_a = interpolate_rgb(WHITE, color_a, adjusted_intensity(raw_a))
    shade_b = interpolate_rgb(WHITE, color_b, adjusted_intensity(raw_b))
    if raw_a > 0 and raw_b > 0:
        return rgb_to_hex(mix_rgb(shade_a, shade_b, 0.5))
    if raw_a > 0:
        return rgb_to_hex(shade_a)
    return rgb_to_hex(shade_b)


def control_color(control_type: ControlType) -> Optional[str]:
    return CONTROL_COLORS.get(ControlType(control_type))


def replicate_color(replicate_group: int) -> Optional[str]:
    if replicate_group <= 0:
        return None
    return REPLICATE_COLORS[(replicate_group - 1) % len(REPLICATE_COLORS)]


def contrasting_text_color(hex_color: Optional[str]) -> str:
    """Black text on light backgrounds, white on dark ones."""
    rgb = hex_to_rgb(hex_color) if hex_color else None
    if rgb is None:
        return "#000000"
    r, g, b = rgb
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000000" if luminance > 0.5 else "#FFFFFF"
