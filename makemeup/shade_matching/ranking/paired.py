# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Two-tone (dual-point) shade matching.

A face is sampled at two points: the primary tone (front of the cheek)
and the secondary tone (the side of the face, usually in shadow). Each
tone is ranked against the catalog on its own, then the two rankings are
crossed into pairs. Pairs from the same product line, then the same
brand, come first so a user can buy two shades of one foundation.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from makemeup.shade_matching.color_science import delta_e76, hex_to_cielab, normalize_hex
from makemeup.shade_matching.lighting import LightingContext
from makemeup.shade_matching.models import CatalogEntry, MatchResult
from makemeup.shade_matching.ranking.engine import MatchEngine
from makemeup.shade_matching.undertone import SkinUndertone, classify_skin_undertone

logger = logging.getLogger(__name__)

# Score multipliers for pairs that share a product line or a brand
SAME_PRODUCT_BONUS = 0.8
SAME_BRAND_BONUS = 0.9

# Each tone is ranked this many times deeper than the pair limit
CANDIDATES_PER_PAIR = 2

_LIGHT_COVERAGE_WORDS = ('sheer', 'tint', 'bb', 'cc')
_FULL_COVERAGE_WORDS = ('full', 'maximum', 'complete')


@dataclass
class ToneReading:
    """One sampled skin tone.

    Attributes:
        hex: Normalized hex.
        cielab: (L*, a*, b*).
        skin_undertone: Four-category undertone.
        confidence: How much the sample is trusted, 0-1.
    """
    hex: str
    cielab: Tuple[float, float, float]
    skin_undertone: SkinUndertone
    confidence: float

    @property
    def depth(self) -> float:
        """CIELAB lightness L*."""
        return self.cielab[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hex': self.hex,
            'cielab': {'l': self.cielab[0], 'a': self.cielab[1], 'b': self.cielab[2]},
            'undertone': self.skin_undertone.value,
            'depth': self.depth,
            'confidence': self.confidence,
        }


@dataclass
class DualPointAnalysis:
    """Primary and secondary tones of one face.

    Attributes:
        primary: Front-of-face tone.
        secondary: Side-of-face (shadow) tone.
        tone_difference: ΔE76 between the two tones.
        undertone_consistency: True when both tones share an undertone.
    """
    primary: ToneReading
    secondary: ToneReading
    tone_difference: float
    undertone_consistency: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'primary': self.primary.to_dict(),
            'secondary': self.secondary.to_dict(),
            'tone_difference': self.tone_difference,
            'undertone_consistency': self.undertone_consistency,
        }


@dataclass
class PairedMatch:
    """A catalog shade for each tone, scored together.

    Attributes:
        primary: Match for the primary tone.
        secondary: Match for the secondary tone.
        score: Mean of the two distances times the pair bonus (lower = better).
        same_brand: Both shades are from one brand.
        same_product: Both shades are from one product line of one brand.
    """
    primary: MatchResult
    secondary: MatchResult
    score: float
    same_brand: bool
    same_product: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'primary': self.primary.to_dict(),
            'secondary': self.secondary.to_dict(),
            'score': self.score,
            'same_brand': self.same_brand,
            'same_product': self.same_product,
        }


@dataclass
class RecommendationGroup:
    """Best pairs from one product line.

    Attributes:
        brand: Brand of the primary shades.
        product: Product line of the primary shades.
        pairs: Up to three pairs, in paired-ranking order.
        score: Mean score of every pair in the product line.
        coverage: 'light', 'medium' or 'full', guessed from the product name.
    """
    brand: str
    product: str
    pairs: List[PairedMatch] = field(default_factory=list)
    score: float = 0.0
    coverage: str = 'medium'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'brand': self.brand,
            'product': self.product,
            'pairs': [p.to_dict() for p in self.pairs],
            'score': self.score,
            'coverage': self.coverage,
        }


def _tone_reading(hex_color: str, confidence: float) -> ToneReading:
    normalized = normalize_hex(hex_color)
    cielab = hex_to_cielab(normalized)
    return ToneReading(
        hex=normalized,
        cielab=cielab,
        skin_undertone=classify_skin_undertone(cielab[1], cielab[2]),
        confidence=confidence,
    )


def analyze_dual_point(
    primary_hex: str,
    secondary_hex: str,
    primary_confidence: float = 0.9,
    secondary_confidence: float = 0.85,
) -> DualPointAnalysis:
    """Describe the two tones of a face.

    Raises:
        InvalidHexError: If either hex is malformed.
    """
    primary = _tone_reading(primary_hex, primary_confidence)
    secondary = _tone_reading(secondary_hex, secondary_confidence)

    return DualPointAnalysis(
        primary=primary,
        secondary=secondary,
        tone_difference=delta_e76(primary.cielab, secondary.cielab),
        undertone_consistency=primary.skin_undertone == secondary.skin_undertone,
    )


def pair_bonus(same_brand: bool, same_product: bool) -> float:
    """Score multiplier rewarding pairs from one brand or product line."""
    if same_product:
        return SAME_PRODUCT_BONUS
    if same_brand:
        return SAME_BRAND_BONUS
    return 1.0


def find_paired_matches(
    analysis: DualPointAnalysis,
    catalog: Sequence[CatalogEntry],
    engine: Optional[MatchEngine] = None,
    lighting: Optional[LightingContext] = None,
    limit: int = 20,
) -> List[PairedMatch]:
    """Pair catalog matches for the primary and secondary tones.

    Each tone is ranked with MatchEngine.rank, keeping 2 * limit
    candidates. Every primary candidate is paired with every secondary
    candidate and scored by the mean of their lighting-corrected
    distances times pair_bonus().

    Args:
        analysis: DualPointAnalysis of the face.
        catalog: Catalog entries.
        engine: MatchEngine. Default config if None.
        lighting: Capture conditions shared by both tones.
        limit: Maximum number of pairs.

    Returns:
        Pairs ordered same-product first, then same-brand, then by score.

    Raises:
        ValueError: If limit is negative.
    """
    engine = engine or MatchEngine()
    depth = limit * CANDIDATES_PER_PAIR

    primary = engine.rank(analysis.primary.hex, catalog, lighting=lighting, n=depth).top_matches
    secondary = engine.rank(analysis.secondary.hex, catalog, lighting=lighting, n=depth).top_matches

    pairs = []
    for p_match in primary:
        for s_match in secondary:
            same_brand = p_match.entry.brand == s_match.entry.brand
            same_product = same_brand and p_match.entry.product == s_match.entry.product
            score = (p_match.distance + s_match.distance) / 2 * pair_bonus(same_brand, same_product)
            pairs.append(PairedMatch(
                primary=p_match,
                secondary=s_match,
                score=score,
                same_brand=same_brand,
                same_product=same_product,
            ))

    pairs.sort(key=lambda p: (not p.same_product, not p.same_brand, p.score))

    logger.debug(
        f"Paired {len(primary)} x {len(secondary)} candidates for "
        f"{analysis.primary.hex}/{analysis.secondary.hex}: {len(pairs)} pairs"
    )
    return pairs[:limit]


def coverage_type(product: str) -> str:
    """Guess a foundation's coverage from its product name."""
    name = (product or '').lower()
    if any(word in name for word in _LIGHT_COVERAGE_WORDS):
        return 'light'
    if any(word in name for word in _FULL_COVERAGE_WORDS):
        return 'full'
    return 'medium'


def recommendation_groups(
    pairs: Sequence[PairedMatch],
    max_groups: int = 4,
    pairs_per_group: int = 3,
) -> List[RecommendationGroup]:
    """Group pairs by product line and pick one line per brand.

    Lines are keyed on the primary shade's brand and product. A line's
    score is the mean score of all its pairs; lines are taken best first
    and a brand is used at most once.

    Args:
        pairs: Pairs from find_paired_matches().
        max_groups: Groups returned, each from a different brand.
        pairs_per_group: Pairs kept per group.

    Returns:
        RecommendationGroup list, best first.
    """
    lines = {}
    for pair in pairs:
        key = (pair.primary.entry.brand, pair.primary.entry.product)
        lines.setdefault(key, []).append(pair)

    groups = [
        RecommendationGroup(
            brand=brand,
            product=product,
            pairs=line_pairs[:pairs_per_group],
            score=sum(p.score for p in line_pairs) / len(line_pairs),
            coverage=coverage_type(product),
        )
        for (brand, product), line_pairs in lines.items()
    ]
    groups.sort(key=lambda g: g.score)

    seen_brands = set()
    result = []
    for group in groups:
        if len(result) >= max_groups:
            break
        if group.brand in seen_brands:
            continue
        seen_brands.add(group.brand)
        result.append(group)

    return result
