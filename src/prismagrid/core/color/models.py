"""
Color Models - Value types for grid palette generation.

- HSL: a single hue/saturation/lightness color (one grid cell)
- ColumnMode: which channel varies across columns
- GridConfig: the complete parameter set that reproduces a palette
- ThemeSuggestion: a named configuration returned by prompt generation
"""

import math
from dataclasses import dataclass, asdict, replace as dc_replace
from enum import Enum
from numbers import Real
from typing import Dict, Tuple, Any


class ColumnMode(str, Enum):
    """Channel stepped across the columns of the grid."""
    LIGHTNESS = "lightness"
    SATURATION = "saturation"


@dataclass(frozen=True)
class HSL:
    """
    Hue/saturation/lightness color.

    Attributes:
        h: Hue in degrees (0-360)
        s: Saturation percent (0-100)
        l: Lightness percent (0-100)
    """
    h: float
    s: float
    l: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to {"h", "s", "l"} dictionary."""
        return asdict(self)


# Bounds of the manual controls, used to sanitise untrusted configs
CONFIG_BOUNDS: Dict[str, Tuple[int, int]] = {
    "base_hue": (0, 360),
    "base_sat": (0, 100),
    "base_light": (0, 100),
    "hue_step": (-60, 60),
    "sat_step": (-20, 20),
    "light_step": (-20, 20),
    "rows": (1, 20),
    "cols": (1, 20),
}

# Wire (camelCase) name for each attribute
_WIRE_KEYS = {
    "base_hue": "baseHue",
    "base_sat": "baseSat",
    "base_light": "baseLight",
    "hue_step": "hueStep",
    "sat_step": "satStep",
    "light_step": "lightStep",
    "rows": "rows",
    "cols": "cols",
    "column_mode": "columnMode",
}


def _is_number(value: Any) -> bool:
    """Finite int or float (bool excluded)."""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True)
class GridConfig:
    """
    Complete parameter set for a palette grid.

    Hue steps by row; lightness or saturation steps by column depending
    on column_mode. The inactive column step is kept so that switching
    modes back and forth restores the previous grid.
    """
    base_hue: float
    base_sat: float
    base_light: float
    hue_step: float
    sat_step: float
    light_step: float
    rows: int
    cols: int
    column_mode: ColumnMode = ColumnMode.LIGHTNESS

    def __post_init__(self):
        # Accept the plain string form ("lightness" / "saturation")
        if not isinstance(self.column_mode, ColumnMode):
            object.__setattr__(self, "column_mode", ColumnMode(self.column_mode))

    @property
    def active_column_step(self) -> float:
        """Step applied across columns for the current mode."""
        if self.column_mode == ColumnMode.SATURATION:
            return self.sat_step
        return self.light_step

    def replace(self, **changes: Any) -> "GridConfig":
        """Return a copy with the given attributes changed."""
        return dc_replace(self, **changes)

    def clamped(self) -> "GridConfig":
        """Return a copy with every numeric field clamped to CONFIG_BOUNDS."""
        changes = {}
        for attr, (low, high) in CONFIG_BOUNDS.items():
            value = getattr(self, attr)
            if attr in ("rows", "cols"):
                value = int(round(value))
            changes[attr] = max(low, min(high, value))
        return self.replace(**changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire/storage shape."""
        data = {wire: getattr(self, attr) for attr, wire in _WIRE_KEYS.items()}
        data["columnMode"] = self.column_mode.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridConfig":
        """
        Create a config from the camelCase wire shape.

        Missing keys fall back to DEFAULT_CONFIG.

        Raises:
            ValueError: If a numeric field is not a number or columnMode
                is not a known mode
        """
        values = {}
        for attr, wire in _WIRE_KEYS.items():
            value = data.get(wire, getattr(DEFAULT_CONFIG, attr))
            if attr != "column_mode" and not _is_number(value):
                raise ValueError(f"Invalid value for '{wire}': {value!r}")
            values[attr] = value
        return cls(**values)


@dataclass(frozen=True)
class ThemeSuggestion:
    """A generated configuration with its display name and description."""
    name: str
    description: str
    config: GridConfig


DEFAULT_CONFIG = GridConfig(
    base_hue=200,
    base_sat=70,
    base_light=50,
    hue_step=15,
    sat_step=10,
    light_step=8,
    rows=8,
    cols=8,
    column_mode=ColumnMode.LIGHTNESS,
)
