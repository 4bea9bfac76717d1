# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Ranking components for the shade matching engine.

This package contains the decomposed matching pipeline:
- scoring: Per-shade distance and undertone penalty, parallel catalog scan
- perimeter: Darker perimeter shade selection
- engine: MatchEngine, cross-brand grouping and shade ladders
- paired: Two-tone analysis, paired matches and recommendation groups
"""

from makemeup.shade_matching.ranking.scoring import (
    undertone_penalty,
    score_entry,
    score_catalog,
)
from makemeup.shade_matching.ranking.perimeter import (
    is_perimeter_candidate,
    select_perimeter_options,
)
from makemeup.shade_matching.ranking.engine import (
    BrandRecommendation,
    MatchEngine,
    rank_matches,
    group_by_brand,
    shade_ladder,
)
from makemeup.shade_matching.ranking.paired import (
    DualPointAnalysis,
    PairedMatch,
    RecommendationGroup,
    analyze_dual_point,
    find_paired_matches,
    recommendation_groups,
)

__all__ = [
    'undertone_penalty',
    'score_entry',
    'score_catalog',
    'is_perimeter_candidate',
    'select_perimeter_options',
    'BrandRecommendation',
    'MatchEngine',
    'rank_matches',
    'group_by_brand',
    'shade_ladder',
    'DualPointAnalysis',
    'PairedMatch',
    'RecommendationGroup',
    'analyze_dual_point',
    'find_paired_matches',
    'recommendation_groups',
]
