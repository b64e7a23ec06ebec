"""
Grid Generator - Expands a GridConfig into a matrix of HSL colors.

Rows step the hue (wrapping around the color wheel); columns step either
lightness or saturation (clamped to 0-100). The same config always yields
the same grid, so a saved config is the palette.
"""

import math
from typing import List, Union

from .models import HSL, ColumnMode, GridConfig
from .utils import _round_half_up, hsl_to_hex

Grid = List[List[HSL]]


def _count(value: float) -> int:
    """Number of iterations of `for i = 0; i < value; i++`."""
    if value <= 0:
        return 0
    return math.ceil(value)


def _clamp_percent(value: float) -> float:
    return max(0, min(100, value))


def generate_grid_colors(
    base_hue: float,
    base_sat: float,
    base_light: float,
    hue_step: float,
    sat_step: float,
    light_step: float,
    rows: int,
    cols: int,
    column_mode: Union[ColumnMode, str],
) -> Grid:
    """
    Generate the rows x cols color matrix.

    Args:
        base_hue: Hue of the first row (degrees)
        base_sat: Starting saturation (percent)
        base_light: Starting lightness (percent)
        hue_step: Hue change per row (degrees, signed)
        sat_step: Saturation change per column in saturation mode
        light_step: Lightness change per column in lightness mode
        rows: Number of rows (<= 0 gives an empty grid)
        cols: Number of columns (<= 0 gives empty rows)
        column_mode: "lightness" or "saturation"

    Returns:
        Row-major matrix, grid[row][col]
    """
    mode = ColumnMode(column_mode)
    grid: Grid = []

    for r in range(_count(rows)):
        hue = math.fmod(base_hue + r * hue_step, 360)
        if hue < 0:
            hue += 360

        row: List[HSL] = []
        for c in range(_count(cols)):
            sat = base_sat
            light = base_light
            if mode == ColumnMode.LIGHTNESS:
                light = _clamp_percent(base_light + c * light_step)
            else:
                sat = _clamp_percent(base_sat + c * sat_step)

            row.append(HSL(
                h=_round_half_up(hue),
                s=_round_half_up(sat),
                l=_round_half_up(light),
            ))
        grid.append(row)

    return grid


def generate_grid(config: GridConfig) -> Grid:
    """Generate the color matrix for a GridConfig."""
    return generate_grid_colors(
        config.base_hue,
        config.base_sat,
        config.base_light,
        config.hue_step,
        config.sat_step,
        config.light_step,
        config.rows,
        config.cols,
        config.column_mode,
    )


def grid_to_hex(grid: Grid) -> List[List[str]]:
    """Map every cell of a grid to its hex string."""
    return [[hsl_to_hex(color) for color in row] for row in grid]
