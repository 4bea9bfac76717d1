# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Pigment-based color recreation.

Breaks a skin or shade color down into five artist pigments plus titanium
white and recreates a swatch from that recipe, the way a makeup artist
would mix it by hand:

    1. Burnt umber and ultramarine blue establish depth, red, yellow and
       aquamarine tune the undertone. These five are normalised to sum to 1.
    2. White is measured separately and only blended in after the base is
       mixed. It is capped at 0.4 so the recreation never washes out.

Saved matches store the recipe as a flat camelCase dict, so the pigment
RGB constants and the dict keys must stay stable.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from makemeup.shade_matching.color_science import parse_hex, rgb_to_hex

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

PIGMENTS: Dict[str, RGB] = {
    'aquamarine': (127, 255, 212),
    'burnt_umber': (138, 51, 36),
    'cadmium_red': (227, 0, 34),
    'cadmium_yellow': (255, 246, 0),
    'ultramarine_blue': (18, 10, 143),
}
WHITE: RGB = (255, 255, 255)

BASE_PIGMENTS = tuple(PIGMENTS)
MAX_WHITE = 0.4

# Approximately sqrt(3 * 255^2), the largest RGB distance
MAX_RGB_DISTANCE = 441.67

# Saved-data key for each field
_DICT_KEYS = {
    'aquamarine': 'aquamarine',
    'burnt_umber': 'burntUmber',
    'cadmium_red': 'cadmiumRed',
    'cadmium_yellow': 'cadmiumYellow',
    'ultramarine_blue': 'ultramarineBlue',
}


@dataclass(frozen=True)
class BaseMix:
    """Proportions of the five base pigments, summing to 1.0.

    White is not part of the base. Use BaseMix.normalized() to build one
    from raw weights.
    """
    aquamarine: float = 0.0
    burnt_umber: float = 0.0
    cadmium_red: float = 0.0
    cadmium_yellow: float = 0.0
    ultramarine_blue: float = 0.0

    @classmethod
    def normalized(cls, **weights: float) -> 'BaseMix':
        """Build a BaseMix from raw, non-normalised pigment weights.

        Negative weights count as zero. If every weight is zero the mix is
        empty and recreates as black.

        Args:
            **weights: Raw weight per base pigment name.

        Returns:
            BaseMix whose proportions sum to 1.0 (or all zero).
        """
        unknown = set(weights) - set(BASE_PIGMENTS)
        if unknown:
            raise ValueError(f"Unknown base pigments: {sorted(unknown)}")

        clipped = {name: max(0.0, weights.get(name, 0.0)) for name in BASE_PIGMENTS}
        total = sum(clipped.values())
        if total <= 0:
            return cls()
        return cls(**{name: value / total for name, value in clipped.items()})

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in BASE_PIGMENTS}

    @property
    def total(self) -> float:
        return sum(self.as_dict().values())


@dataclass(frozen=True)
class PigmentMix:
    """A full pigment recipe: a base mix plus white added last.

    Attributes:
        base: Normalised five-pigment base.
        white: Fraction of white blended into the mixed base, 0-0.4.
    """
    base: BaseMix
    white: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.white <= MAX_WHITE:
            raise ValueError(f"white must be within 0-{MAX_WHITE}, got {self.white}")

    def to_dict(self) -> Dict[str, float]:
        """Flat camelCase recipe, as stored with saved matches."""
        data = {_DICT_KEYS[name]: value for name, value in self.base.as_dict().items()}
        data['white'] = self.white
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PigmentMix':
        """Rebuild a recipe from its camelCase dict.

        The base proportions are re-normalised, so older recipes whose
        base did not sum exactly to 1 still load.
        """
        weights = {name: float(data.get(key, 0.0)) for name, key in _DICT_KEYS.items()}
        white = min(MAX_WHITE, max(0.0, float(data.get('white', 0.0))))
        return cls(base=BaseMix.normalized(**weights), white=white)


@dataclass(frozen=True)
class PigmentColor:
    """A color recreated from a pigment recipe.

    Attributes:
        hex: Recreated color as "#RRGGBB".
        rgb: Recreated color channels.
        mix: The recipe it was recreated from.
        is_recreated: Always True for colors built from a recipe.
    """
    hex: str
    rgb: RGB
    mix: PigmentMix
    is_recreated: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hex': self.hex,
            'rgb': list(self.rgb),
            'pigmentMix': self.mix.to_dict(),
            'isRecreated': self.is_recreated,
        }


def _luminance(r: float, g: float, b: float) -> float:
    return 0.299 * r + 0.587 * g + 0.114 * b


def analyze_mix(hex_color: str) -> PigmentMix:
    """Work out a pigment recipe for a target color.

    Args:
        hex_color: Target color as hex.

    Returns:
        PigmentMix with a normalised base and a capped white fraction.

    Raises:
        InvalidHexError: If hex_color is malformed.
    """
    r, g, b = (c / 255.0 for c in parse_hex(hex_color))
    luminance = _luminance(r, g, b)

    # Depth comes from burnt umber, undertone depth from ultramarine
    burnt_umber = (1.0 - luminance) * 0.8
    ultramarine_blue = b * 0.7
    cadmium_red = 0.0
    cadmium_yellow = 0.0
    aquamarine = 0.0

    # Red-dominant colors
    if r > g and r > b:
        cadmium_red = r * 0.5
        cadmium_yellow = g * 0.3

    # Yellow/warm component
    if g > b and r > 0.5:
        cadmium_yellow += (g - b) * 0.4

    # Green/olive component
    if g > r * 0.9 and g > b * 1.1:
        aquamarine = (g - max(r, b)) * 0.3

    base = BaseMix.normalized(
        aquamarine=aquamarine,
        burnt_umber=burnt_umber,
        cadmium_red=cadmium_red,
        cadmium_yellow=cadmium_yellow,
        ultramarine_blue=ultramarine_blue,
    )

    # White is only for lightness and never enters the base normalisation
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    saturation = (max_c - min_c) / max_c if max_c > 0 else 0.0
    white = min(MAX_WHITE, luminance * (1.0 - saturation * 0.6))

    return PigmentMix(base=base, white=max(0.0, white))


def mix_base(base: BaseMix) -> Tuple[float, float, float]:
    """Mix the base pigments into an RGB color (unrounded)."""
    proportions = base.as_dict()
    total = sum(proportions.values())
    if total <= 0:
        return (0.0, 0.0, 0.0)

    channels = [0.0, 0.0, 0.0]
    for name, amount in proportions.items():
        if amount <= 0:
            continue
        pigment = PIGMENTS[name]
        for i in range(3):
            channels[i] += pigment[i] * amount

    return (channels[0] / total, channels[1] / total, channels[2] / total)


def add_white(color: Tuple[float, float, float], white: float) -> RGB:
    """Blend white into an already-mixed base color.

    Args:
        color: Mixed base color channels.
        white: Fraction of white, 0-1.

    Returns:
        Final RGB channels, rounded and clamped to 0-255.
    """
    final = []
    for base_c, white_c in zip(color, WHITE):
        value = base_c * (1.0 - white) + white_c * white
        final.append(int(round(max(0.0, min(255.0, value)))))
    return (final[0], final[1], final[2])


def reconstruct_rgb(mix: PigmentMix) -> RGB:
    """Recreate RGB channels from a recipe: base first, then white."""
    return add_white(mix_base(mix.base), mix.white)


def reconstruct_color(mix: PigmentMix) -> str:
    """Recreate a hex color from a pigment recipe."""
    return rgb_to_hex(*reconstruct_rgb(mix))


def create_pigment_color(hex_color: str) -> PigmentColor:
    """Analyze a color and recreate it from its pigment recipe.

    Args:
        hex_color: Target color as hex.

    Returns:
        PigmentColor holding the recreated swatch and its recipe.
    """
    mix = analyze_mix(hex_color)
    rgb = reconstruct_rgb(mix)
    recreated = rgb_to_hex(*rgb)
    logger.debug(f"Recreated {hex_color} as {recreated} from pigments {mix.to_dict()}")
    return PigmentColor(hex=recreated, rgb=rgb, mix=mix)


def mix_distance(color1: PigmentColor, color2: PigmentColor) -> float:
    """RGB distance between two pigment colors on a 0-100 scale."""
    r1, g1, b1 = color1.rgb
    r2, g2, b2 = color2.rgb
    distance = math.sqrt((r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2)
    return min(100.0, distance / MAX_RGB_DISTANCE * 100.0)


def match_percent(user: PigmentColor, product: PigmentColor) -> float:
    """Match percentage between a skin color and a product (0-100)."""
    return max(0.0, 100.0 - mix_distance(user, product))
