# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Per-entry scoring of catalog shades.

Every catalog entry with a usable hex is converted to OKLAB, measured
against the lighting-adjusted skin sample and multiplied by an undertone
penalty. Scoring is a single linear pass with no shared state, so large
catalogs can be split across worker threads and concatenated back in order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from makemeup.shade_matching.color_science import (
    PerceptualColor,
    hex_to_oklab,
    is_valid_hex,
    oklab_distance,
)
from makemeup.shade_matching.models import CatalogEntry, MatchResult
from makemeup.shade_matching.undertone import Undertone, undertone_from_shade_name

logger = logging.getLogger(__name__)

UNDERTONE_MATCH_FACTOR = 1.0
# Historical factor: mismatches are discounted, which ranks them *closer*
UNDERTONE_MISMATCH_FACTOR = 0.9
CORRECTED_MISMATCH_FACTOR = 1.1


def undertone_penalty(
    entry_undertone: Undertone,
    user_undertone: Undertone,
    mode: str = 'literal',
) -> float:
    """Calculate the score multiplier for an entry's undertone.

    In 'literal' mode a mismatch multiplies by 0.9. Because a lower score
    ranks better, mismatched shades are pulled forward. 'corrected' mode
    multiplies mismatches by 1.1 instead so they are pushed back.

    Args:
        entry_undertone: Undertone of the catalog shade.
        user_undertone: Undertone of the skin sample.
        mode: 'literal' or 'corrected'.

    Returns:
        Multiplier applied to the perceptual distance.
    """
    if entry_undertone == user_undertone:
        return UNDERTONE_MATCH_FACTOR
    if mode == 'corrected':
        return CORRECTED_MISMATCH_FACTOR
    return UNDERTONE_MISMATCH_FACTOR


def score_entry(
    entry: CatalogEntry,
    user_color: PerceptualColor,
    user_undertone: Undertone,
    mode: str = 'literal',
) -> Optional[MatchResult]:
    """Score a single catalog entry.

    Args:
        entry: Catalog entry to score.
        user_color: Lighting-adjusted OKLAB color of the skin sample.
        user_undertone: Undertone of the unadjusted skin sample.
        mode: Undertone penalty mode.

    Returns:
        MatchResult, or None if the entry has no usable hex.
    """
    if not entry.hex:
        return None

    if not is_valid_hex(entry.hex):
        logger.warning(
            f"Skipping catalog shade with malformed hex {entry.hex!r}: "
            f"{entry.brand} {entry.product} {entry.label}"
        )
        return None

    color = hex_to_oklab(entry.hex)
    distance = oklab_distance(user_color, color)
    undertone = undertone_from_shade_name(entry.label)
    score = distance * undertone_penalty(undertone, user_undertone, mode)

    return MatchResult(
        entry=entry,
        color=color,
        distance=distance,
        undertone=undertone,
        score=score,
    )


def _score_chunk(
    entries: Sequence[CatalogEntry],
    user_color: PerceptualColor,
    user_undertone: Undertone,
    mode: str,
) -> List[MatchResult]:
    scored = []
    for entry in entries:
        result = score_entry(entry, user_color, user_undertone, mode)
        if result is not None:
            scored.append(result)
    return scored


def score_catalog(
    catalog: Sequence[CatalogEntry],
    user_color: PerceptualColor,
    user_undertone: Undertone,
    mode: str = 'literal',
    parallel_threshold: int = 0,
    max_workers: int = 4,
) -> List[MatchResult]:
    """Score every usable entry in a catalog.

    Results keep catalog order whether or not scoring ran in parallel,
    so a stable sort afterwards gives identical rankings either way.

    Args:
        catalog: Catalog entries to score.
        user_color: Lighting-adjusted OKLAB color of the skin sample.
        user_undertone: Undertone of the unadjusted skin sample.
        mode: Undertone penalty mode.
        parallel_threshold: Catalog size above which scoring is split
            across threads. 0 = always serial.
        max_workers: Number of worker threads.

    Returns:
        List of MatchResult in catalog order, unsorted.
    """
    if not catalog:
        return []

    if parallel_threshold <= 0 or len(catalog) <= parallel_threshold or max_workers <= 1:
        scored = _score_chunk(catalog, user_color, user_undertone, mode)
    else:
        scored = _score_parallel(catalog, user_color, user_undertone, mode, max_workers)

    skipped = len(catalog) - len(scored)
    if skipped:
        logger.debug(f"Scored {len(scored)}/{len(catalog)} catalog shades ({skipped} without usable hex)")

    return scored


def _score_parallel(
    catalog: Sequence[CatalogEntry],
    user_color: PerceptualColor,
    user_undertone: Undertone,
    mode: str,
    max_workers: int,
) -> List[MatchResult]:
    chunk_size = -(-len(catalog) // max_workers)
    chunks = [catalog[i:i + chunk_size] for i in range(0, len(catalog), chunk_size)]

    logger.debug(f"Scoring {len(catalog)} shades in {len(chunks)} parallel chunks")

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        # Submit in chunk order and collect in the same order
        futures = [
            executor.submit(_score_chunk, chunk, user_color, user_undertone, mode)
            for chunk in chunks
        ]
        scored = []
        for future in futures:
            scored.extend(future.result())

    return scored
