# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Foundation ranking engine.

Ties the pipeline together: convert the skin sample, correct it for
lighting, score the catalog, sort, and pick the top matches plus the
darker perimeter options.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from makemeup.shade_matching.color_science import hex_to_oklab, is_valid_hex
from makemeup.shade_matching.config import MatchConfig
from makemeup.shade_matching.lighting import LightingContext
from makemeup.shade_matching.models import CatalogEntry, MatchResult, MatchSet
from makemeup.shade_matching.ranking.perimeter import select_perimeter_options
from makemeup.shade_matching.ranking.scoring import score_catalog
from makemeup.shade_matching.undertone import undertone_from_oklab

logger = logging.getLogger(__name__)


@dataclass
class BrandRecommendation:
    """Best matches from a single brand.

    Attributes:
        brand: Brand name.
        matches: The brand's best matches, best first.
    """
    brand: str
    matches: List[MatchResult] = field(default_factory=list)

    @property
    def best_score(self) -> float:
        return self.matches[0].score if self.matches else float('inf')


class MatchEngine:
    """Ranks catalog shades against a skin sample."""

    def __init__(self, config: Optional[MatchConfig] = None):
        """Initialize the match engine.

        Args:
            config: MatchConfig with matching parameters. Defaults apply if None.
        """
        self.config = config or MatchConfig()

    def default_lighting(self) -> LightingContext:
        return LightingContext(self.config.default_cct_k, self.config.default_cri)

    def rank(
        self,
        user_hex: str,
        catalog: Sequence[CatalogEntry],
        lighting: Optional[LightingContext] = None,
        n: Optional[int] = None,
    ) -> MatchSet:
        """Rank a catalog against a skin sample.

        The sample's undertone is classified before lighting correction;
        undertone is a property of the skin, not of the light.

        Args:
            user_hex: Skin sample as hex.
            catalog: Catalog entries. Entries without a hex are skipped.
            lighting: Capture conditions. Config defaults if None.
            n: Number of top matches. Config default if None.

        Returns:
            MatchSet. Empty lists when no entry could be scored.

        Raises:
            InvalidHexError: If user_hex is malformed.
            ValueError: If n is negative.
        """
        if n is None:
            n = self.config.default_n_results
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValueError(f"n must be a non-negative integer, got {n!r}")
        if lighting is None:
            lighting = self.default_lighting()

        user_color = hex_to_oklab(user_hex)
        user_adjusted = lighting.adjust(user_color)
        user_undertone = undertone_from_oklab(user_color)

        scored = score_catalog(
            catalog,
            user_adjusted,
            user_undertone,
            mode=self.config.undertone_penalty_mode,
            parallel_threshold=self.config.parallel_threshold,
            max_workers=self.config.max_workers,
        )

        if not scored:
            logger.debug(f"No scorable catalog shades for {user_hex}")
            return MatchSet(user_color=user_adjusted, user_undertone=user_undertone)

        # Stable sort: ties keep catalog order
        scored.sort(key=lambda m: m.score)
        top_matches = scored[:n]

        perimeter = select_perimeter_options(
            scored,
            top_matches[0] if top_matches else None,
            min_delta_l=self.config.perimeter_min_delta_l,
            max_delta_l=self.config.perimeter_max_delta_l,
            count=self.config.perimeter_count,
        )

        logger.debug(
            f"Ranked {len(scored)} shades for {user_hex} "
            f"(undertone={user_undertone.value}, cct={lighting.cct_k}, cri={lighting.cri}): "
            f"{len(top_matches)} top, {len(perimeter)} perimeter"
        )

        return MatchSet(
            top_matches=top_matches,
            perimeter_options=perimeter,
            user_color=user_adjusted,
            user_undertone=user_undertone,
        )


def rank_matches(
    user_hex: str,
    catalog: Sequence[CatalogEntry],
    lighting: Optional[LightingContext] = None,
    n: int = 5,
    config: Optional[MatchConfig] = None,
) -> MatchSet:
    """Rank a catalog against a skin sample with default settings.

    See MatchEngine.rank.
    """
    return MatchEngine(config).rank(user_hex, catalog, lighting=lighting, n=n)


def group_by_brand(
    matches: Sequence[MatchResult],
    per_brand: int = 3,
    max_brands: int = 10,
) -> List[BrandRecommendation]:
    """Group ranked matches into cross-brand recommendations.

    Args:
        matches: Matches sorted best first.
        per_brand: Matches kept per brand.
        max_brands: Brands kept.

    Returns:
        BrandRecommendation list ordered by each brand's best score.
    """
    groups = {}
    for match in matches:
        groups.setdefault(match.entry.brand, []).append(match)

    recommendations = [
        BrandRecommendation(brand=brand, matches=brand_matches[:per_brand])
        for brand, brand_matches in groups.items()
    ]
    recommendations.sort(key=lambda r: r.best_score)

    return recommendations[:max_brands]


def shade_ladder(
    catalog: Sequence[CatalogEntry],
    brand: str,
    product: Optional[str] = None,
) -> List[CatalogEntry]:
    """List a brand's shades from lightest to darkest.

    Args:
        catalog: Catalog entries.
        brand: Brand to include.
        product: Optional product line filter.

    Returns:
        Entries with a valid hex, sorted by descending OKLAB lightness.
    """
    shades = [
        entry for entry in catalog
        if entry.brand == brand
        and (product is None or entry.product == product)
        and is_valid_hex(entry.hex)
    ]
    shades.sort(key=lambda entry: hex_to_oklab(entry.hex).L, reverse=True)
    return shades
