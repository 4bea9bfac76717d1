# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Skin-tone reference library.

A curated set of named skin swatches, each tagged with a four-category
undertone and a depth. Used to describe a user's sample ("closest to
Golden Oat, light, warm") and to seed manual skin-tone selection.
"""

from collections import namedtuple
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from makemeup.shade_matching.color_science import (
    PerceptualColor,
    hex_to_cielab,
    hex_to_oklab,
    normalize_hex,
    oklab_distance,
)
from makemeup.shade_matching.undertone import (
    SkinUndertone,
    Undertone,
    classify_skin_undertone,
    skin_undertone_compatibility,
    undertone_from_oklab,
)

DEPTHS = ('fair', 'light', 'medium', 'deep', 'very-deep')

# Upper OKLAB lightness bound for each depth, darkest first
_DEPTH_BOUNDS = (
    (0.45, 'very-deep'),
    (0.58, 'deep'),
    (0.72, 'medium'),
    (0.85, 'light'),
)

SkinToneReference = namedtuple(
    'SkinToneReference', ['hex', 'name', 'undertone', 'depth', 'category', 'source']
)

_W = SkinUndertone.WARM
_C = SkinUndertone.COOL
_N = SkinUndertone.NEUTRAL
_O = SkinUndertone.OLIVE

SKIN_TONE_REFERENCES: Tuple[SkinToneReference, ...] = tuple(
    SkinToneReference(*row) for row in (
        # Fair
        ('#FED48D', 'Light Peach Rose', _W, 'fair', 'fair', 'palette_1'),
        ('#F9D6BE', 'Fair Warm', _W, 'fair', 'fair', 'palette_1'),
        ('#FAD6BD', 'Fair Neutral', _N, 'fair', 'fair', 'palette_1'),
        ('#FCD6BE', 'Fair Cool', _C, 'fair', 'fair', 'palette_1'),
        ('#FED489', 'Fair Olive', _O, 'fair', 'fair', 'palette_1'),
        # Light
        ('#F7D6C4', 'Plumpkin Essence', _W, 'light', 'light', 'palette_2'),
        ('#FFDC8D', 'Persian Melon', _W, 'light', 'light', 'palette_2'),
        ('#FFD9A2', 'September Sun', _W, 'light', 'light', 'palette_2'),
        ('#E6D59E', 'Deweter', _C, 'light', 'light', 'palette_2'),
        ('#F6D2C4', 'Nutter Butter', _W, 'light', 'light', 'palette_2'),
        ('#E8CABE', 'Au Naturel', _N, 'light', 'light', 'palette_2'),
        ('#FBC4AF', 'Peach Melba', _W, 'light', 'light', 'palette_2'),
        ('#EBC091', 'Golden Oat', _W, 'light', 'light', 'palette_2'),
        ('#CB9962', 'Burnt Pumpkin', _W, 'light', 'light', 'palette_2'),
        ('#AB8864', 'Dublin', _O, 'light', 'light', 'palette_2'),
        ('#F5E0CD', 'Light Cool 1', _C, 'light', 'light', 'palette_1'),
        ('#F0D0B4', 'Light Warm 1', _W, 'light', 'light', 'palette_1'),
        ('#ECC19C', 'Light Warm 2', _W, 'light', 'light', 'palette_1'),
        # Medium
        ('#F0C2A0', 'Olive Light', _O, 'medium', 'olive', 'palette_3'),
        ('#E6B493', 'Olive Medium', _O, 'medium', 'olive', 'palette_3'),
        ('#DFA485', 'Olive Deep', _O, 'medium', 'olive', 'palette_3'),
        ('#D59980', 'Olive Deeper', _O, 'medium', 'olive', 'palette_3'),
        ('#CB8B75', 'Olive Deepest', _O, 'medium', 'olive', 'palette_3'),
        ('#EEC495', 'Humble Gold', _W, 'medium', 'medium', 'palette_2'),
        ('#EFC088', 'Colonial Yellow', _W, 'medium', 'medium', 'palette_2'),
        ('#E7BC90', 'Dark Yellow', _W, 'medium', 'medium', 'palette_2'),
        ('#ECBF83', 'Eldar Flesh', _W, 'medium', 'medium', 'palette_2'),
        ('#D09E7C', 'Clementine', _W, 'medium', 'medium', 'palette_2'),
        ('#D39171', 'Terra Cotta Pot', _W, 'medium', 'medium', 'palette_2'),
        ('#A8916D', 'Medium Warm 1', _W, 'medium', 'medium', 'palette_1'),
        ('#DFB28B', 'Medium Warm 2', _W, 'medium', 'medium', 'palette_1'),
        ('#CF9E76', 'Medium Warm 3', _W, 'medium', 'medium', 'palette_1'),
        # Deep
        ('#A96654', 'Light Brown 1', _W, 'deep', 'light_brown', 'palette_3'),
        ('#A8664B', 'Light Brown 2', _W, 'deep', 'light_brown', 'palette_3'),
        ('#A46143', 'Light Brown 3', _W, 'deep', 'light_brown', 'palette_3'),
        ('#9F5B37', 'Light Brown 4', _W, 'deep', 'light_brown', 'palette_3'),
        ('#A0522F', 'Light Brown 5', _W, 'deep', 'light_brown', 'palette_3'),
        ('#94623D', 'Caramel', _W, 'deep', 'deep', 'palette_2'),
        ('#885633', 'Burnt Crust', _W, 'deep', 'deep', 'palette_2'),
        ('#764520', 'Vintage Wood', _W, 'deep', 'deep', 'palette_2'),
        ('#836849', 'Rusty Gate', _N, 'deep', 'deep', 'palette_2'),
        ('#81492A', 'Lamb Chop', _W, 'deep', 'deep', 'palette_2'),
        ('#633A17', 'Pullman Brown', _W, 'deep', 'deep', 'palette_2'),
        ('#937952', 'Deep Warm 1', _W, 'deep', 'deep', 'palette_1'),
        ('#77562F', 'Deep Warm 2', _W, 'deep', 'deep', 'palette_1'),
        ('#AC8457', 'Deep Warm 3', _W, 'deep', 'deep', 'palette_1'),
        ('#A46C35', 'Deep Warm 4', _W, 'deep', 'deep', 'palette_1'),
        # Very deep
        ('#7E4121', 'Brown 1', _W, 'very-deep', 'brown', 'palette_3'),
        ('#784325', 'Brown 2', _W, 'very-deep', 'brown', 'palette_3'),
        ('#754428', 'Brown 3', _W, 'very-deep', 'brown', 'palette_3'),
        ('#6F4428', 'Brown 4', _W, 'very-deep', 'brown', 'palette_3'),
        ('#69442C', 'Brown 5', _W, 'very-deep', 'brown', 'palette_3'),
        ('#48301F', 'Black Brown 1', _W, 'very-deep', 'black_brown', 'palette_3'),
        ('#452A19', 'Black Brown 2', _W, 'very-deep', 'black_brown', 'palette_3'),
        ('#3C2718', 'Black Brown 3', _N, 'very-deep', 'black_brown', 'palette_3'),
        ('#352115', 'Black Brown 4', _N, 'very-deep', 'black_brown', 'palette_3'),
        ('#2D1B11', 'Black Brown 5', _N, 'very-deep', 'black_brown', 'palette_3'),
        ('#8E572A', 'Very Deep 1', _W, 'very-deep', 'very_deep', 'palette_1'),
        ('#7D4921', 'Very Deep 2', _W, 'very-deep', 'very_deep', 'palette_1'),
    )
)

# OKLAB of each reference, computed once at import time
_REFERENCE_OKLAB: Tuple[PerceptualColor, ...] = tuple(
    hex_to_oklab(ref.hex) for ref in SKIN_TONE_REFERENCES
)


@dataclass
class ReferenceMatch:
    """A reference swatch and its distance to a sample."""
    reference: SkinToneReference
    distance: float


@dataclass
class SkinToneAnalysis:
    """Description of a single skin color sample.

    Attributes:
        hex: Normalised "#RRGGBB" sample.
        oklab: OKLAB color.
        cielab: CIE L*a*b* color.
        undertone: Three-category undertone from OKLAB.
        skin_undertone: Four-category undertone from CIELAB.
        depth: Depth label from OKLAB lightness.
        closest_reference: Nearest reference swatch.
    """
    hex: str
    oklab: PerceptualColor
    cielab: Tuple[float, float, float]
    undertone: Undertone
    skin_undertone: SkinUndertone
    depth: str
    closest_reference: Optional[ReferenceMatch] = None

    def to_dict(self) -> Dict:
        closest = None
        if self.closest_reference:
            ref = self.closest_reference.reference
            closest = {
                'hex': ref.hex,
                'name': ref.name,
                'undertone': ref.undertone.value,
                'depth': ref.depth,
                'distance': self.closest_reference.distance,
            }
        return {
            'hex': self.hex,
            'oklab': {'L': self.oklab.L, 'a': self.oklab.a, 'b': self.oklab.b},
            'cielab': {'l': self.cielab[0], 'a': self.cielab[1], 'b': self.cielab[2]},
            'undertone': self.undertone.value,
            'skin_undertone': self.skin_undertone.value,
            'depth': self.depth,
            'closest_reference': closest,
        }


def depth_from_lightness(lightness: float) -> str:
    """Map OKLAB lightness to a depth label."""
    for bound, depth in _DEPTH_BOUNDS:
        if lightness < bound:
            return depth
    return 'fair'


def references_by_depth(depth: str) -> List[SkinToneReference]:
    """All references of a depth ('fair' ... 'very-deep')."""
    if depth not in DEPTHS:
        raise ValueError(f"Unknown depth '{depth}'. Expected one of: {', '.join(DEPTHS)}")
    return [ref for ref in SKIN_TONE_REFERENCES if ref.depth == depth]


def references_by_undertone(undertone: SkinUndertone) -> List[SkinToneReference]:
    """All references with a four-category undertone."""
    undertone = SkinUndertone(undertone)
    return [ref for ref in SKIN_TONE_REFERENCES if ref.undertone == undertone]


def find_closest_references(
    hex_color: str,
    n: int = 5,
    undertone: Optional[SkinUndertone] = None,
) -> List[ReferenceMatch]:
    """Find the reference swatches nearest to a color.

    When an undertone is given, each distance is multiplied by
    (2 - compatibility) between that undertone and the reference's, so
    clashing references fall behind equally close compatible ones.
    The reported distance is always the plain OKLAB distance.

    Args:
        hex_color: Sample color as hex.
        n: Number of references to return.
        undertone: Optional SkinUndertone of the sample.

    Returns:
        ReferenceMatch list, closest first.
    """
    target = hex_to_oklab(hex_color)
    matches = [
        ReferenceMatch(reference=ref, distance=oklab_distance(target, color))
        for ref, color in zip(SKIN_TONE_REFERENCES, _REFERENCE_OKLAB)
    ]

    if undertone is None:
        matches.sort(key=lambda m: m.distance)
    else:
        undertone = SkinUndertone(undertone)
        matches.sort(
            key=lambda m: m.distance * (
                2.0 - skin_undertone_compatibility(undertone, m.reference.undertone)
            )
        )
    return matches[:n]


def find_closest_reference(
    hex_color: str,
    undertone: Optional[SkinUndertone] = None,
) -> ReferenceMatch:
    """Find the single nearest reference swatch."""
    return find_closest_references(hex_color, n=1, undertone=undertone)[0]


def analyze_skin_tone(hex_color: str) -> SkinToneAnalysis:
    """Describe a skin color sample.

    Args:
        hex_color: Sample color as hex.

    Returns:
        SkinToneAnalysis.

    Raises:
        InvalidHexError: If hex_color is malformed.
    """
    normalized = normalize_hex(hex_color)
    oklab = hex_to_oklab(normalized)
    cielab = hex_to_cielab(normalized)
    skin_undertone = classify_skin_undertone(cielab[1], cielab[2])

    return SkinToneAnalysis(
        hex=normalized,
        oklab=oklab,
        cielab=cielab,
        undertone=undertone_from_oklab(oklab),
        skin_undertone=skin_undertone,
        depth=depth_from_lightness(oklab.L),
        closest_reference=find_closest_reference(normalized, undertone=skin_undertone),
    )
