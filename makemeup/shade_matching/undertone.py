# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Undertone classification.

Two taxonomies live here and never mix:

Undertone (cool / neutral / warm)
    Used by catalog ranking. A skin sample is classified from its OKLAB
    chroma; a catalog shade is classified from its shade name, because
    brands encode undertone in naming schemes (MAC's NC/NW) that the hex
    alone cannot recover.

SkinUndertone (warm / cool / neutral / olive)
    Used by the skin-tone reference library, classified from CIELAB
    a*/b*. It is never compared against Undertone.
"""

import re
from enum import Enum

# OKLAB chroma threshold; skin-tone chroma rarely exceeds +/-0.1
OKLAB_UNDERTONE_THRESHOLD = 0.005

# CIELAB thresholds for the four-category classifier
CIELAB_A_THRESHOLD = 2.0
CIELAB_B_THRESHOLD = 5.0
CIELAB_OLIVE_THRESHOLD = 3.0

_NC_RE = re.compile(r'\bNC\d+', re.IGNORECASE)
_NW_RE = re.compile(r'\bNW\d+', re.IGNORECASE)
_COOL_RE = re.compile(r'cool|pink|rose', re.IGNORECASE)
_WARM_RE = re.compile(r'warm|yellow|golden', re.IGNORECASE)


class Undertone(Enum):
    """Three-category undertone used for catalog ranking."""
    COOL = 'cool'
    NEUTRAL = 'neutral'
    WARM = 'warm'


class SkinUndertone(Enum):
    """Four-category undertone used for skin-tone references."""
    WARM = 'warm'
    COOL = 'cool'
    NEUTRAL = 'neutral'
    OLIVE = 'olive'


def undertone_from_oklab(color) -> Undertone:
    """Classify an OKLAB color's undertone from its a/b axes.

    Lightness is ignored. Both axes must clear the threshold in the
    same direction, anything else is neutral.

    Args:
        color: (L, a, b) tuple or PerceptualColor.

    Returns:
        Undertone.WARM, Undertone.COOL or Undertone.NEUTRAL.
    """
    a, b = color[1], color[2]
    if a > OKLAB_UNDERTONE_THRESHOLD and b > OKLAB_UNDERTONE_THRESHOLD:
        return Undertone.WARM
    if a < -OKLAB_UNDERTONE_THRESHOLD and b < -OKLAB_UNDERTONE_THRESHOLD:
        return Undertone.COOL
    return Undertone.NEUTRAL


def undertone_from_shade_name(shade_name: str) -> Undertone:
    """Infer undertone from a shade's name.

    Rules are applied in order:
        1. "NC<digits>" (MAC naming) -> warm
        2. "NW<digits>" (MAC naming) -> cool
        3. contains "cool", "pink" or "rose" -> cool
        4. contains "warm", "yellow" or "golden" -> warm
        5. otherwise -> neutral

    Args:
        shade_name: Free-text shade label. None or empty is neutral.

    Returns:
        Undertone.
    """
    if not shade_name:
        return Undertone.NEUTRAL
    if _NC_RE.search(shade_name):
        return Undertone.WARM
    if _NW_RE.search(shade_name):
        return Undertone.COOL
    if _COOL_RE.search(shade_name):
        return Undertone.COOL
    if _WARM_RE.search(shade_name):
        return Undertone.WARM
    return Undertone.NEUTRAL


def classify_skin_undertone(a_star: float, b_star: float) -> SkinUndertone:
    """Classify a skin color into four undertones from CIELAB a*/b*.

    Args:
        a_star: CIELAB a* (green-red).
        b_star: CIELAB b* (blue-yellow).

    Returns:
        SkinUndertone.
    """
    if a_star < -CIELAB_A_THRESHOLD and abs(b_star) < CIELAB_OLIVE_THRESHOLD:
        return SkinUndertone.OLIVE
    if a_star < -CIELAB_A_THRESHOLD:
        return SkinUndertone.COOL
    if a_star > CIELAB_A_THRESHOLD and b_star > CIELAB_B_THRESHOLD:
        return SkinUndertone.WARM
    return SkinUndertone.NEUTRAL


def skin_undertone_compatibility(first: SkinUndertone, second: SkinUndertone) -> float:
    """How well two skin undertones go together (0-1, 1 = identical).

    Neutral pairs well with anything, warm and cool clash the most,
    olive sits in between.
    """
    if first == second:
        return 1.0
    if SkinUndertone.NEUTRAL in (first, second):
        return 0.9
    if {first, second} == {SkinUndertone.WARM, SkinUndertone.COOL}:
        return 0.7
    return 0.8
