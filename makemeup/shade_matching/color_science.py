# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Perceptual color science utilities using OKLAB color space.

Skin samples and catalog shades are compared in OKLAB, a perceptually
uniform color space designed by Bjorn Ottosson in 2020. Equal numeric
distances correspond to roughly equal perceived differences, which is what
makes a plain Euclidean distance usable for shade matching.

References:
    - https://bottosson.github.io/posts/oklab/
    - https://www.w3.org/TR/css-color-4/#ok-lab

The OKLAB color space uses three components:
    - L: Lightness (0 = black, 1 = white). Skin tones sit around 0.3-0.9.
    - a: Green-red axis (negative = green, positive = red)
    - b: Blue-yellow axis (negative = blue, positive = yellow)

Downstream thresholds (undertone, perimeter window, lighting shifts) are
tuned to this exact space, so the matrices below must not be altered.
"""

import math
import re
from typing import NamedTuple, Tuple

from makemeup.shade_matching.errors import InvalidHexError

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')

# Linear sRGB -> LMS (cone response)
_RGB_TO_LMS = (
    (0.4122214708, 0.5363325363, 0.0514459929),
    (0.2119034982, 0.6806995451, 0.1073969566),
    (0.0883024619, 0.2817188376, 0.6299787005),
)

# Cube-rooted LMS -> OKLAB
_LMS_TO_OKLAB = (
    (0.2104542553, 0.7936177850, -0.0040720468),
    (1.9779984951, -2.4285922050, 0.4505937099),
    (0.0259040371, 0.7827717662, -0.8086757660),
)

# OKLAB -> cube-rooted LMS
_OKLAB_TO_LMS = (
    (1.0, 0.3963377774, 0.2158037573),
    (1.0, -0.1055613458, -0.0638541728),
    (1.0, -0.0894841775, -1.2914855480),
)

# LMS -> linear sRGB
_LMS_TO_RGB = (
    (4.0767416621, -3.3077115913, 0.2309699292),
    (-1.2684380046, 2.6097574011, -0.3413193965),
    (-0.0041960863, -0.7034186147, 1.7076147010),
)

# D65 reference white for CIELAB
_D65_WHITE = (0.95047, 1.00000, 1.08883)


class PerceptualColor(NamedTuple):
    """A color in OKLAB space."""
    L: float
    a: float
    b: float


def _mat_vec(m, v) -> Tuple[float, float, float]:
    return (
        m[0][0] * v[0] + m[0][1] * v[1] + m[0][2] * v[2],
        m[1][0] * v[0] + m[1][1] * v[1] + m[1][2] * v[2],
        m[2][0] * v[0] + m[2][1] * v[1] + m[2][2] * v[2],
    )


def _cbrt(x: float) -> float:
    # Handle negative values for out-of-gamut edge cases
    return x ** (1 / 3) if x >= 0 else -((-x) ** (1 / 3))


def parse_hex(hex_color: str) -> Tuple[int, int, int]:
    """Parse a hex color string into integer RGB channels.

    Accepts 6-digit and 3-digit shorthand forms, with or without a
    leading '#'. Surrounding whitespace is ignored.

    Args:
        hex_color: Hex color string like "#F1C27D", "f1c27d" or "#FFF".

    Returns:
        Tuple of (r, g, b), each 0-255.

    Raises:
        InvalidHexError: If the string is not a well-formed hex color.
    """
    if not isinstance(hex_color, str):
        raise InvalidHexError(hex_color)

    match = _HEX_RE.match(hex_color.strip())
    if not match:
        raise InvalidHexError(hex_color)

    digits = match.group(1)
    # Handle shorthand like #FFF
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)

    return (
        int(digits[0:2], 16),
        int(digits[2:4], 16),
        int(digits[4:6], 16),
    )


def is_valid_hex(hex_color) -> bool:
    """Check whether a value is a well-formed hex color string."""
    return isinstance(hex_color, str) and bool(_HEX_RE.match(hex_color.strip()))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert RGB channels to an upper-case "#RRGGBB" string.

    Channels are rounded and clamped to 0-255.
    """
    def channel(c: float) -> int:
        return int(round(max(0.0, min(255.0, c))))

    return f"#{channel(r):02X}{channel(g):02X}{channel(b):02X}"


def normalize_hex(hex_color: str) -> str:
    """Return the canonical "#RRGGBB" form of a hex color."""
    return rgb_to_hex(*parse_hex(hex_color))


def srgb_to_linear(c: float) -> float:
    """Convert sRGB component (0-1) to linear RGB.

    sRGB uses gamma encoding to better match human perception.
    This function reverses that encoding for linear math operations.

    Args:
        c: sRGB component value (0.0 to 1.0).

    Returns:
        Linear RGB component value (0.0 to 1.0).
    """
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def linear_to_srgb(c: float) -> float:
    """Convert linear RGB component to sRGB.

    Args:
        c: Linear RGB component value (0.0 to 1.0).

    Returns:
        sRGB component value (0.0 to 1.0).
    """
    if c <= 0.0031308:
        return c * 12.92
    return 1.055 * (c ** (1 / 2.4)) - 0.055


def rgb_to_oklab(r: int, g: int, b: int) -> PerceptualColor:
    """Convert RGB (0-255) to OKLAB color space.

    Args:
        r: Red component (0-255).
        g: Green component (0-255).
        b: Blue component (0-255).

    Returns:
        PerceptualColor of (L, a, b).
    """
    linear = (
        srgb_to_linear(r / 255.0),
        srgb_to_linear(g / 255.0),
        srgb_to_linear(b / 255.0),
    )

    lms = _mat_vec(_RGB_TO_LMS, linear)
    lms_ = (_cbrt(lms[0]), _cbrt(lms[1]), _cbrt(lms[2]))

    return PerceptualColor(*_mat_vec(_LMS_TO_OKLAB, lms_))


def hex_to_oklab(hex_color: str) -> PerceptualColor:
    """Convert hex color string to OKLAB.

    Args:
        hex_color: Hex color string like "#FF0000", "ff0000" or "#F00".

    Returns:
        PerceptualColor of (L, a, b).

    Raises:
        InvalidHexError: If the string is not a well-formed hex color.
    """
    return rgb_to_oklab(*parse_hex(hex_color))


def oklab_to_rgb(color) -> Tuple[int, int, int]:
    """Convert an OKLAB color back to RGB (0-255).

    Out-of-gamut results are clamped to the sRGB cube.

    Args:
        color: (L, a, b) tuple or PerceptualColor.

    Returns:
        Tuple of (r, g, b) integers.
    """
    lms_ = _mat_vec(_OKLAB_TO_LMS, color)
    lms = (lms_[0] ** 3, lms_[1] ** 3, lms_[2] ** 3)
    linear = _mat_vec(_LMS_TO_RGB, lms)

    channels = []
    for c in linear:
        srgb = linear_to_srgb(max(0.0, min(1.0, c)))
        channels.append(int(round(srgb * 255.0)))
    return (channels[0], channels[1], channels[2])


def oklab_to_hex(color) -> str:
    """Convert an OKLAB color to a "#RRGGBB" string."""
    return rgb_to_hex(*oklab_to_rgb(color))


def oklab_distance(lab1, lab2) -> float:
    """Calculate perceptual distance between two OKLAB colors.

    Uses Euclidean distance in OKLAB space, which is perceptually uniform.
    A distance of ~0.02 is roughly the just-noticeable difference (JND).

    Args:
        lab1: First color as (L, a, b) tuple.
        lab2: Second color as (L, a, b) tuple.

    Returns:
        Distance value. Typical range 0 (identical) to ~1.4 (max difference).
    """
    dL = lab1[0] - lab2[0]
    da = lab1[1] - lab2[1]
    db = lab1[2] - lab2[2]
    return math.sqrt(dL * dL + da * da + db * db)


def color_distance_oklab(hex1: str, hex2: str) -> float:
    """Calculate perceptual distance between two hex colors using OKLAB."""
    return oklab_distance(hex_to_oklab(hex1), hex_to_oklab(hex2))


def get_oklab_lightness(hex_color: str) -> float:
    """Get the perceptual lightness of a color (0-1)."""
    return hex_to_oklab(hex_color).L


def get_oklab_chroma(hex_color: str) -> float:
    """Get the chroma (colorfulness) of a color.

    Chroma is the distance from the neutral axis in OKLAB space.

    Args:
        hex_color: Hex color string.

    Returns:
        Chroma value (typically 0 to ~0.4 for sRGB colors).
    """
    _, a, b = hex_to_oklab(hex_color)
    return math.sqrt(a * a + b * b)


def get_oklab_hue(hex_color: str) -> float:
    """Get the hue angle of a color in OKLAB space.

    Args:
        hex_color: Hex color string.

    Returns:
        Hue angle in degrees (0-360), or 0 for achromatic colors.
    """
    _, a, b = hex_to_oklab(hex_color)

    # Handle achromatic colors
    if abs(a) < 1e-6 and abs(b) < 1e-6:
        return 0.0

    hue = math.degrees(math.atan2(b, a))
    if hue < 0:
        hue += 360.0

    return hue


def hex_to_cielab(hex_color: str) -> Tuple[float, float, float]:
    """Convert hex color to CIE 1976 L*a*b* (D65 reference white).

    Only the four-category skin undertone classifier works in this space;
    all matching distances use OKLAB.

    Args:
        hex_color: Hex color string.

    Returns:
        Tuple of (L*, a*, b*).
    """
    r, g, b = parse_hex(hex_color)
    r_lin = srgb_to_linear(r / 255.0)
    g_lin = srgb_to_linear(g / 255.0)
    b_lin = srgb_to_linear(b / 255.0)

    x = r_lin * 0.4124564 + g_lin * 0.3575761 + b_lin * 0.1804375
    y = r_lin * 0.2126729 + g_lin * 0.7151522 + b_lin * 0.0721750
    z = r_lin * 0.0193339 + g_lin * 0.1191920 + b_lin * 0.9503041

    x /= _D65_WHITE[0]
    y /= _D65_WHITE[1]
    z /= _D65_WHITE[2]

    def f(t):
        delta = 6.0 / 29.0
        if t > delta ** 3:
            return t ** (1.0 / 3.0)
        return t / (3.0 * delta ** 2) + 4.0 / 29.0

    l_star = 116.0 * f(y) - 16.0
    a_star = 500.0 * (f(x) - f(y))
    b_star = 200.0 * (f(y) - f(z))

    return (l_star, a_star, b_star)


def delta_e76(lab1, lab2) -> float:
    """CIE 1976 color difference between two CIELAB colors.

    A difference of about 2.3 is just noticeable.
    """
    dL = lab1[0] - lab2[0]
    da = lab1[1] - lab2[1]
    db = lab1[2] - lab2[2]
    return math.sqrt(dL * dL + da * da + db * db)


# Names used by the matching pipeline
hex_to_perceptual = hex_to_oklab
perceptual_distance = oklab_distance
