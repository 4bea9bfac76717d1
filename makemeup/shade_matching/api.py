# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""FastAPI web server for foundation matching.

Every endpoint answers with JSON. Failures use the body
{"ok": false, "error": "..."}: 400 for bad input, 503 when the catalog
cannot be read, 500 for anything unexpected.

Environment:
    MAKEMEUP_CONFIG: Optional path to a JSON MatchConfig file.
    MAKEMEUP_CATALOG: Optional catalog path, overrides catalog_path.
"""

import io
import logging
import os
from typing import Optional

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from makemeup.shade_matching.catalog import open_catalog_source
from makemeup.shade_matching.config import MatchConfig
from makemeup.shade_matching.errors import CatalogUnavailableError
from makemeup.shade_matching.lighting import LightingContext
from makemeup.shade_matching.pigments import create_pigment_color, match_percent, mix_distance
from makemeup.shade_matching.ranking.engine import MatchEngine
from makemeup.shade_matching.ranking.paired import (
    analyze_dual_point,
    find_paired_matches,
    recommendation_groups,
)
from makemeup.shade_matching.references import analyze_skin_tone
from makemeup.shade_matching.sampling import sample_skin_tone

logger = logging.getLogger(__name__)


class MatchRequest(BaseModel):
    user_hex: str
    lighting_cct_k: Optional[float] = None
    lighting_cri: Optional[float] = None
    n_results: Optional[int] = Field(default=None, ge=0, le=100)


class PairedMatchRequest(BaseModel):
    primary_hex: str
    secondary_hex: str
    lighting_cct_k: Optional[float] = None
    lighting_cri: Optional[float] = None
    limit: Optional[int] = Field(default=None, ge=0, le=100)


class HexRequest(BaseModel):
    hex: str


class PigmentMatchRequest(BaseModel):
    user_hex: str
    product_hex: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'ok': False, 'error': message})


def load_config_from_env() -> MatchConfig:
    """Build the server's MatchConfig from environment variables."""
    config_path = os.environ.get('MAKEMEUP_CONFIG')
    config = MatchConfig.from_file(config_path) if config_path else MatchConfig()

    catalog_path = os.environ.get('MAKEMEUP_CATALOG')
    if catalog_path:
        config.catalog_path = catalog_path
    return config


def create_app(config: Optional[MatchConfig] = None, catalog_source=None) -> FastAPI:
    """Create the matching API.

    Args:
        config: MatchConfig. Read from the environment if None.
        catalog_source: Object with get_entries(limit). Opened lazily from
            config.catalog_path if None.

    Returns:
        FastAPI application.
    """
    config = config or load_config_from_env()

    app = FastAPI(
        title="Make Me Up Shade Matching API",
        description="Lighting-aware, undertone-aware foundation shade matching",
        version="0.1.0",
    )
    app.state.config = config
    app.state.engine = MatchEngine(config)
    app.state.catalog_source = catalog_source

    def get_catalog_source():
        if app.state.catalog_source is None:
            if not config.catalog_path:
                raise CatalogUnavailableError("Catalog unavailable: no catalog configured")
            app.state.catalog_source = open_catalog_source(config.catalog_path)
        return app.state.catalog_source

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        details = '; '.join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        return _error(400, f"Invalid request: {details}")

    @app.exception_handler(ValueError)
    async def handle_value_error(request: Request, exc: ValueError):
        return _error(400, str(exc))

    @app.exception_handler(CatalogUnavailableError)
    async def handle_catalog_error(request: Request, exc: CatalogUnavailableError):
        logger.error(f"Catalog failure on {request.url.path}: {exc}")
        return _error(503, str(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return _error(500, "Internal error")

    def request_lighting(cct_k, cri) -> LightingContext:
        return LightingContext(
            cct_k=config.default_cct_k if cct_k is None else cct_k,
            cri=config.default_cri if cri is None else cri,
        )

    @app.post("/match-foundations")
    def match_foundations(body: MatchRequest):
        """Rank catalog shades against a skin sample."""
        lighting = request_lighting(body.lighting_cct_k, body.lighting_cri)
        n = config.default_n_results if body.n_results is None else body.n_results

        catalog = get_catalog_source().get_entries(config.catalog_limit)
        result = app.state.engine.rank(body.user_hex, catalog, lighting=lighting, n=n)
        return result.to_dict()

    @app.post("/match-paired")
    def match_paired(body: PairedMatchRequest):
        """Paired shades for the primary and secondary tones of a face."""
        lighting = request_lighting(body.lighting_cct_k, body.lighting_cri)
        limit = config.paired_limit if body.limit is None else body.limit
        analysis = analyze_dual_point(body.primary_hex, body.secondary_hex)

        catalog = get_catalog_source().get_entries(config.catalog_limit)
        pairs = find_paired_matches(
            analysis, catalog, engine=app.state.engine, lighting=lighting, limit=limit,
        )
        return {
            'ok': True,
            'analysis': analysis.to_dict(),
            'pairs': [p.to_dict() for p in pairs],
            'groups': [g.to_dict() for g in recommendation_groups(pairs)],
        }

    @app.post("/pigment-mix")
    def pigment_mix(body: HexRequest):
        """Pigment recipe and recreated swatch for a color."""
        color = create_pigment_color(body.hex)
        return {
            'ok': True,
            'hex': color.hex,
            'rgb': list(color.rgb),
            'mix': color.mix.to_dict(),
        }

    @app.post("/pigment-match")
    def pigment_match(body: PigmentMatchRequest):
        """Pigment-space match percentage between skin and product."""
        user = create_pigment_color(body.user_hex)
        product = create_pigment_color(body.product_hex)
        return {
            'ok': True,
            'distance': mix_distance(user, product),
            'match_percent': match_percent(user, product),
        }

    @app.post("/analyze-skin-tone")
    def analyze(body: HexRequest):
        """Undertone, depth and closest reference for a skin color."""
        analysis = analyze_skin_tone(body.hex)
        return {'ok': True, **analysis.to_dict()}

    @app.post("/sample-skin-tone")
    async def sample(
        image: UploadFile = File(...),
        left: Optional[int] = Form(None),
        top: Optional[int] = Form(None),
        right: Optional[int] = Form(None),
        bottom: Optional[int] = Form(None),
    ):
        """Average, lightest and darkest skin colors from a photo."""
        coords = (left, top, right, bottom)
        box = None
        if any(c is not None for c in coords):
            if any(c is None for c in coords):
                return _error(400, "Crop box needs all of left, top, right and bottom")
            box = coords

        content = await image.read()
        result = sample_skin_tone(io.BytesIO(content), box=box)
        return {'ok': True, **result.to_dict()}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
