# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Perimeter shade selection.

Perimeter options are catalog shades one to two tones darker than the
primary match, meant for the sides of the face in two-tone foundation and
contour routines. A shade qualifies when its OKLAB lightness is 0.03 to
0.12 below the primary match.
"""

from typing import List, Optional, Sequence

from makemeup.shade_matching.models import MatchResult

DEFAULT_MIN_DELTA_L = 0.03
DEFAULT_MAX_DELTA_L = 0.12
DEFAULT_PERIMETER_COUNT = 3


def is_perimeter_candidate(
    base_lightness: float,
    candidate_lightness: float,
    min_delta_l: float = DEFAULT_MIN_DELTA_L,
    max_delta_l: float = DEFAULT_MAX_DELTA_L,
) -> bool:
    """Check whether a shade is moderately darker than the base shade.

    Both bounds are inclusive.
    """
    delta_l = base_lightness - candidate_lightness
    return min_delta_l <= delta_l <= max_delta_l


def select_perimeter_options(
    scored: Sequence[MatchResult],
    base: Optional[MatchResult],
    min_delta_l: float = DEFAULT_MIN_DELTA_L,
    max_delta_l: float = DEFAULT_MAX_DELTA_L,
    count: int = DEFAULT_PERIMETER_COUNT,
) -> List[MatchResult]:
    """Pick darker alternatives to the primary match.

    Candidates sharing the base shade's undertone come first, then the
    rest. Within each group the lowest score wins.

    Args:
        scored: Every scored catalog shade, not only the top matches.
        base: The primary match, or None when nothing matched.
        min_delta_l: Minimum lightness drop below the base.
        max_delta_l: Maximum lightness drop below the base.
        count: Maximum number of options.

    Returns:
        Up to `count` MatchResult objects.
    """
    if base is None or count <= 0:
        return []

    target_l = base.color.L
    darker = [
        m for m in scored
        if is_perimeter_candidate(target_l, m.color.L, min_delta_l, max_delta_l)
    ]

    darker.sort(key=lambda m: (m.undertone != base.undertone, m.score))

    return darker[:count]
