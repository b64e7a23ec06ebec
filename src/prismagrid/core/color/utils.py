"""
Color Utilities - Color space conversion and contrast functions.

Provides functions for:
- HSL to hex conversion
- Hex/RGB format conversion
- Luma (YIQ) calculation
- Contrast (text) color selection
"""

import math
import re
from typing import Tuple

from .models import HSL

BLACK = "#000000"
WHITE = "#ffffff"

# YIQ luma threshold between light and dark backgrounds
LUMA_THRESHOLD = 128

_HEX_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


def _round_half_up(value: float) -> int:
    """Round to nearest integer, halves rounded up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def hsl_to_hex(color: HSL) -> str:
    """
    Convert an HSL color to a lowercase hex string.

    Uses the closed-form HSL to RGB transform:
        f(n) = l - a * max(min(k - 3, 9 - k, 1), -1)
        k = (n + h / 30) mod 12, a = s * min(l, 1 - l)
    with n = 0, 8, 4 for red, green and blue.

    Args:
        color: HSL color (h in degrees, s and l in percent)

    Returns:
        Hex color string (e.g., "#1a8cd8")
    """
    h, s = color.h, color.s
    l = color.l / 100
    a = s * min(l, 1 - l) / 100

    def channel(n: int) -> int:
        k = (n + h / 30) % 12
        value = l - a * max(min(k - 3, 9 - k, 1), -1)
        return max(0, min(255, _round_half_up(255 * value)))

    return rgb_to_hex(channel(0), channel(8), channel(4))


def is_valid_hex(text: str) -> bool:
    """Check that text is '#' followed by exactly 6 hex digits."""
    return bool(_HEX_PATTERN.fullmatch(text or ""))


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """
    Convert hex color to RGB tuple.

    Args:
        hex_color: Hex color string (e.g., "#FF5500" or "FF5500")

    Returns:
        Tuple of (red, green, blue) values (0-255)

    Raises:
        ValueError: If the string is not a 6-digit hex color
    """
    digits = hex_color.lstrip('#')
    if not is_valid_hex(f"#{digits}"):
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return (
        int(digits[0:2], 16),
        int(digits[2:4], 16),
        int(digits[4:6], 16),
    )


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB values (0-255) to a lowercase hex color string."""
    return f"#{r:02x}{g:02x}{b:02x}"


def luma(hex_color: str) -> float:
    """
    Calculate the YIQ luma of a color.

    Uses the formula: (299*R + 587*G + 114*B) / 1000

    Returns:
        Luma value (0.0 to 255.0)
    """
    r, g, b = hex_to_rgb(hex_color)
    return (r * 299 + g * 587 + b * 114) / 1000


def get_contrast_color(hex_color: str) -> str:
    """
    Get the legible text color (black or white) for a background.

    Args:
        hex_color: Background color

    Returns:
        "#000000" for light backgrounds, "#ffffff" for dark ones
    """
    return BLACK if luma(hex_color) >= LUMA_THRESHOLD else WHITE


def format_hsl(color: HSL) -> str:
    """Short label for a cell, e.g. "200° 70% 58%"."""
    return f"{color.h}° {color.s}% {color.l}%"
