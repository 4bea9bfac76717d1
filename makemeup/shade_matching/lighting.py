# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Ambient lighting correction for skin color samples.

A photo taken under warm light reads warmer than the skin really is.
Before comparing against catalog shades (assumed photographed under
neutral daylight) the sample's chroma is shifted the opposite way.
Lightness is never adjusted.

The correction depends on two properties of the light source:
    - CCT: correlated color temperature in Kelvin, 6500K is neutral daylight.
    - CRI: color rendering index 0-100, lower means more distortion.
"""

import math
from dataclasses import dataclass
from typing import Dict

from makemeup.shade_matching.color_science import PerceptualColor
from makemeup.shade_matching.errors import LightingParameterError

NEUTRAL_CCT_K = 6500.0

# Chroma shift per unit of relative temperature offset
A_SHIFT_COEFFICIENT = -0.02
B_SHIFT_COEFFICIENT = -0.03

# Correction scale is CRI_WEIGHT * cri_penalty + BASELINE_SCALE
CRI_WEIGHT = 0.5
BASELINE_SCALE = 0.2


@dataclass(frozen=True)
class LightingContext:
    """Lighting conditions a skin sample was captured under.

    Attributes:
        cct_k: Correlated color temperature in Kelvin. Must be positive.
            Default: 4000 (typical indoor white light).
        cri: Color rendering index, 0-100. Default: 80.
    """
    cct_k: float = 4000.0
    cri: float = 80.0

    def __post_init__(self):
        if isinstance(self.cct_k, bool) or not isinstance(self.cct_k, (int, float)):
            raise LightingParameterError(f"cct_k must be a number, got {self.cct_k!r}")
        if isinstance(self.cri, bool) or not isinstance(self.cri, (int, float)):
            raise LightingParameterError(f"cri must be a number, got {self.cri!r}")
        if not math.isfinite(self.cct_k) or self.cct_k <= 0:
            raise LightingParameterError(
                f"cct_k must be a positive number of Kelvin, got {self.cct_k}"
            )
        if not math.isfinite(self.cri) or not 0 <= self.cri <= 100:
            raise LightingParameterError(f"cri must be within 0-100, got {self.cri}")

    def adjust(self, color: PerceptualColor) -> PerceptualColor:
        """Apply this lighting correction to a color."""
        return adjust_for_lighting(color, self.cct_k, self.cri)


# Named lighting conditions offered to users who don't know their CCT/CRI
LIGHTING_PRESETS: Dict[str, LightingContext] = {
    "daylight": LightingContext(cct_k=6500, cri=95),
    "overcast": LightingContext(cct_k=7000, cri=95),
    "office_fluorescent": LightingContext(cct_k=4000, cri=80),
    "warm_led": LightingContext(cct_k=3000, cri=90),
    "incandescent": LightingContext(cct_k=2700, cri=100),
    "candlelight": LightingContext(cct_k=1900, cri=85),
}


def get_lighting_preset(name: str) -> LightingContext:
    """Look up a named lighting preset.

    Args:
        name: Preset name, e.g. "daylight" or "warm_led".

    Returns:
        The preset's LightingContext.

    Raises:
        LightingParameterError: If the preset does not exist.
    """
    try:
        return LIGHTING_PRESETS[name]
    except KeyError:
        valid = ', '.join(sorted(LIGHTING_PRESETS))
        raise LightingParameterError(
            f"Unknown lighting preset '{name}'. Expected one of: {valid}"
        ) from None


def lighting_adjustment_vector(cct_k: float, cri: float) -> PerceptualColor:
    """Calculate the OKLAB shift that neutralises a light source.

    Warmer light (below 6500K) gives a negative temperature offset and
    therefore a positive chroma shift; cooler light the reverse. Poor color
    rendering scales the shift up, and even perfect rendering keeps a
    baseline scale of 0.2 so temperature always has an effect.

    Args:
        cct_k: Correlated color temperature in Kelvin.
        cri: Color rendering index. Clamped to 0-100.

    Returns:
        PerceptualColor shift with L always 0.
    """
    delta_k = (cct_k - NEUTRAL_CCT_K) / NEUTRAL_CCT_K
    cri_penalty = (100.0 - max(0.0, min(100.0, cri))) / 100.0
    scale = CRI_WEIGHT * cri_penalty + BASELINE_SCALE

    return PerceptualColor(
        0.0,
        A_SHIFT_COEFFICIENT * delta_k * scale,
        B_SHIFT_COEFFICIENT * delta_k * scale,
    )


def adjust_for_lighting(color, cct_k: float, cri: float) -> PerceptualColor:
    """Normalise an observed color as if it were lit by neutral daylight.

    Args:
        color: Observed (L, a, b) color.
        cct_k: Correlated color temperature in Kelvin.
        cri: Color rendering index. Clamped to 0-100.

    Returns:
        Adjusted color. L is returned unchanged.
    """
    shift = lighting_adjustment_vector(cct_k, cri)
    return PerceptualColor(color[0], color[1] + shift.a, color[2] + shift.b)
