"""
Random Config Sampler - Randomized starting configurations.

Base saturation and lightness are kept away from the extremes so that
stepping across columns does not immediately clip to white, black or gray.
"""

import random
from typing import Optional

from .models import ColumnMode, GridConfig

DEFAULT_GRID_SIZE = 8

BASE_HUE_RANGE = (0, 360)
BASE_SAT_RANGE = (40, 80)
BASE_LIGHT_RANGE = (30, 70)
HUE_STEP_RANGE = (10, 30)
COLUMN_STEP_RANGE = (5, 15)


def _signed(rng: random.Random, low: int, high: int) -> int:
    """Magnitude in [low, high) with a random sign."""
    magnitude = rng.randrange(low, high)
    return magnitude if rng.random() < 0.5 else -magnitude


def generate_random_config(rng: Optional[random.Random] = None) -> GridConfig:
    """
    Produce a random, visually safe GridConfig.

    Args:
        rng: Random generator to draw from (defaults to a fresh, system-seeded one)

    Returns:
        GridConfig with integer values inside the sampling ranges
    """
    if rng is None:
        rng = random.Random()
    return GridConfig(
        base_hue=rng.randrange(*BASE_HUE_RANGE),
        base_sat=rng.randrange(*BASE_SAT_RANGE),
        base_light=rng.randrange(*BASE_LIGHT_RANGE),
        hue_step=_signed(rng, *HUE_STEP_RANGE),
        sat_step=_signed(rng, *COLUMN_STEP_RANGE),
        light_step=_signed(rng, *COLUMN_STEP_RANGE),
        rows=DEFAULT_GRID_SIZE,
        cols=DEFAULT_GRID_SIZE,
        column_mode=rng.choice(list(ColumnMode)),
    )
