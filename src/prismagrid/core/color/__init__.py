"""
Color Grid Core for PrismaGrid

Pure, deterministic palette generation: a GridConfig expands into a matrix
of HSL colors (hue by row, lightness or saturation by column), each of
which converts to a hex string and a legible text color.

Usage:
    from prismagrid.core.color import DEFAULT_CONFIG, generate_grid, hsl_to_hex

    grid = generate_grid(DEFAULT_CONFIG)
    hex_color = hsl_to_hex(grid[0][0])
"""

from .models import (
    HSL, ColumnMode, GridConfig, ThemeSuggestion,
    DEFAULT_CONFIG, CONFIG_BOUNDS,
)
from .utils import (
    hsl_to_hex, get_contrast_color, hex_to_rgb, rgb_to_hex,
    luma, is_valid_hex, format_hsl,
)
from .generator import Grid, generate_grid_colors, generate_grid, grid_to_hex
from .sampler import generate_random_config

__all__ = [
    # Value types
    "HSL",
    "ColumnMode",
    "GridConfig",
    "ThemeSuggestion",
    "DEFAULT_CONFIG",
    "CONFIG_BOUNDS",
    # Conversion
    "hsl_to_hex",
    "get_contrast_color",
    "hex_to_rgb",
    "rgb_to_hex",
    "luma",
    "is_valid_hex",
    "format_hsl",
    # Generation
    "Grid",
    "generate_grid_colors",
    "generate_grid",
    "grid_to_hex",
    "generate_random_config",
]
