# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Command line entry points.

makemeup-match  Rank a catalog file against a skin color (or a pair of
                tones with --secondary), or print its pigment recipe or
                skin-tone analysis.
makemeup-serve  Run the matching API with uvicorn.
"""

import argparse
import json
import logging
import sys

import uvicorn

from makemeup.shade_matching.catalog import open_catalog_source
from makemeup.shade_matching.config import MatchConfig, PENALTY_MODES
from makemeup.shade_matching.errors import CatalogUnavailableError
from makemeup.shade_matching.lighting import LIGHTING_PRESETS, LightingContext, get_lighting_preset
from makemeup.shade_matching.pigments import create_pigment_color
from makemeup.shade_matching.ranking.engine import MatchEngine
from makemeup.shade_matching.ranking.paired import (
    analyze_dual_point,
    find_paired_matches,
    recommendation_groups,
)
from makemeup.shade_matching.references import analyze_skin_tone

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Make Me Up - match a skin color against a foundation catalog"
    )

    parser.add_argument("hex", help="Skin color as hex, e.g. '#E5C19E'")
    parser.add_argument(
        "--catalog",
        default=None,
        help="Catalog file (.json, .csv) or SQLite database (.db)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON config file",
    )
    parser.add_argument(
        "--cct",
        type=float,
        default=None,
        help="Lighting color temperature in Kelvin",
    )
    parser.add_argument(
        "--cri",
        type=float,
        default=None,
        help="Lighting color rendering index (0-100)",
    )
    parser.add_argument(
        "--lighting",
        choices=sorted(LIGHTING_PRESETS),
        default=None,
        help="Use a lighting preset instead of --cct/--cri",
    )
    parser.add_argument(
        "-n", "--results",
        type=int,
        default=None,
        help="Number of top matches",
    )
    parser.add_argument(
        "--penalty-mode",
        choices=PENALTY_MODES,
        default=None,
        help="Undertone penalty mode",
    )
    parser.add_argument(
        "--secondary",
        default=None,
        metavar="HEX",
        help="Second skin tone (side of face) for paired matching",
    )
    parser.add_argument(
        "--pigments",
        action="store_true",
        help="Print the pigment recipe instead of matching",
    )
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Print the skin-tone analysis instead of matching",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        if args.pigments:
            output = create_pigment_color(args.hex).to_dict()
        elif args.analyze:
            output = analyze_skin_tone(args.hex).to_dict()
        else:
            output = _match(args)
    except (ValueError, OSError, CatalogUnavailableError) as e:
        print(json.dumps({"ok": False, "error": str(e)}), file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2))
    return 0


def _match(args) -> dict:
    config = MatchConfig.from_file(args.config) if args.config else MatchConfig()
    if args.penalty_mode:
        config.undertone_penalty_mode = args.penalty_mode

    catalog_path = args.catalog or config.catalog_path
    if not catalog_path:
        raise CatalogUnavailableError("Catalog unavailable: pass --catalog or set catalog_path")

    if args.lighting:
        lighting = get_lighting_preset(args.lighting)
    else:
        lighting = LightingContext(
            cct_k=config.default_cct_k if args.cct is None else args.cct,
            cri=config.default_cri if args.cri is None else args.cri,
        )

    catalog = open_catalog_source(catalog_path).get_entries(config.catalog_limit)
    logger.info(f"Matching {args.hex} against {len(catalog)} catalog shades")

    engine = MatchEngine(config)
    if args.secondary:
        analysis = analyze_dual_point(args.hex, args.secondary)
        limit = config.paired_limit if args.results is None else args.results
        pairs = find_paired_matches(analysis, catalog, engine=engine, lighting=lighting, limit=limit)
        return {
            'ok': True,
            'analysis': analysis.to_dict(),
            'pairs': [p.to_dict() for p in pairs],
            'groups': [g.to_dict() for g in recommendation_groups(pairs)],
        }

    result = engine.rank(args.hex, catalog, lighting=lighting, n=args.results)
    return result.to_dict()


def serve(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the Make Me Up matching API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    uvicorn.run(
        "makemeup.shade_matching.api:create_app",
        factory=True,
        host=args.host,
        port=args.port,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
