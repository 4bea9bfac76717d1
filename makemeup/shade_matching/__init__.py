# Shade Matching Engine for Make Me Up
# Lighting-aware, undertone-aware foundation matching in OKLAB space,
# with darker perimeter shades and pigment-based swatch recreation.

from makemeup.shade_matching.errors import (
    InvalidHexError,
    LightingParameterError,
    SamplingError,
    CatalogUnavailableError,
)
from makemeup.shade_matching.color_science import (
    PerceptualColor,
    parse_hex,
    is_valid_hex,
    normalize_hex,
    rgb_to_hex,
    srgb_to_linear,
    linear_to_srgb,
    rgb_to_oklab,
    hex_to_oklab,
    hex_to_perceptual,
    oklab_to_rgb,
    oklab_to_hex,
    oklab_distance,
    perceptual_distance,
    color_distance_oklab,
    get_oklab_lightness,
    get_oklab_chroma,
    get_oklab_hue,
    hex_to_cielab,
    delta_e76,
)
from makemeup.shade_matching.lighting import (
    LightingContext,
    LIGHTING_PRESETS,
    get_lighting_preset,
    lighting_adjustment_vector,
    adjust_for_lighting,
)
from makemeup.shade_matching.undertone import (
    Undertone,
    SkinUndertone,
    undertone_from_oklab,
    undertone_from_shade_name,
    classify_skin_undertone,
    skin_undertone_compatibility,
)
from makemeup.shade_matching.models import (
    CatalogEntry,
    MatchResult,
    MatchSet,
)
from makemeup.shade_matching.config import MatchConfig
from makemeup.shade_matching.ranking import (
    MatchEngine,
    rank_matches,
    select_perimeter_options,
    group_by_brand,
    shade_ladder,
    analyze_dual_point,
    find_paired_matches,
    recommendation_groups,
)
from makemeup.shade_matching.pigments import (
    BaseMix,
    PigmentMix,
    PigmentColor,
    analyze_mix,
    reconstruct_color,
    create_pigment_color,
    mix_distance,
    match_percent,
)
from makemeup.shade_matching.references import (
    SKIN_TONE_REFERENCES,
    SkinToneAnalysis,
    analyze_skin_tone,
    find_closest_reference,
    find_closest_references,
)
from makemeup.shade_matching.sampling import (
    SkinToneSample,
    sample_skin_tone,
)
from makemeup.shade_matching.catalog import (
    CatalogDatabase,
    FileCatalog,
    load_catalog_file,
    open_catalog_source,
)

__all__ = [
    # Errors
    'InvalidHexError',
    'LightingParameterError',
    'SamplingError',
    'CatalogUnavailableError',
    # Color science (OKLAB)
    'PerceptualColor',
    'parse_hex',
    'is_valid_hex',
    'normalize_hex',
    'rgb_to_hex',
    'srgb_to_linear',
    'linear_to_srgb',
    'rgb_to_oklab',
    'hex_to_oklab',
    'hex_to_perceptual',
    'oklab_to_rgb',
    'oklab_to_hex',
    'oklab_distance',
    'perceptual_distance',
    'color_distance_oklab',
    'get_oklab_lightness',
    'get_oklab_chroma',
    'get_oklab_hue',
    'hex_to_cielab',
    'delta_e76',
    # Lighting
    'LightingContext',
    'LIGHTING_PRESETS',
    'get_lighting_preset',
    'lighting_adjustment_vector',
    'adjust_for_lighting',
    # Undertone
    'Undertone',
    'SkinUndertone',
    'undertone_from_oklab',
    'undertone_from_shade_name',
    'classify_skin_undertone',
    'skin_undertone_compatibility',
    # Models
    'CatalogEntry',
    'MatchResult',
    'MatchSet',
    # Config
    'MatchConfig',
    # Ranking
    'MatchEngine',
    'rank_matches',
    'select_perimeter_options',
    'group_by_brand',
    'shade_ladder',
    'analyze_dual_point',
    'find_paired_matches',
    'recommendation_groups',
    # Pigments
    'BaseMix',
    'PigmentMix',
    'PigmentColor',
    'analyze_mix',
    'reconstruct_color',
    'create_pigment_color',
    'mix_distance',
    'match_percent',
    # References
    'SKIN_TONE_REFERENCES',
    'SkinToneAnalysis',
    'analyze_skin_tone',
    'find_closest_reference',
    'find_closest_references',
    # Sampling
    'SkinToneSample',
    'sample_skin_tone',
    # Catalog
    'CatalogDatabase',
    'FileCatalog',
    'load_catalog_file',
    'open_catalog_source',
]
