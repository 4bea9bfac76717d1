# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Data models for the shade matching core."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from makemeup.shade_matching.color_science import PerceptualColor
from makemeup.shade_matching.undertone import Undertone


def _text(value) -> str:
    if value is None:
        return ''
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class CatalogEntry:
    """A foundation shade from the product catalog.

    Catalog entries are created by import jobs and consumed read-only.

    Attributes:
        brand: Brand name.
        product: Product line name.
        shade_name: Shade label, e.g. "NC30" or "Golden Beige".
        hex: Shade color as hex, or None when the source has no color.
        url: Product page URL.
        image: Product image URL.
        specific: Secondary shade label used when shade_name is empty.
    """
    brand: str
    product: str
    shade_name: str = ''
    hex: Optional[str] = None
    url: Optional[str] = None
    image: Optional[str] = None
    specific: Optional[str] = None

    @property
    def label(self) -> str:
        """Shade label used for undertone inference."""
        return self.shade_name or self.specific or ''

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'CatalogEntry':
        """Build an entry from an upstream catalog row.

        Accepts both the upstream column names (name, imgSrc) and the
        field names used here (shade_name, image). Blank hex values
        become None. Non-string labels (a bare shade number in a JSON
        export) are converted to strings.

        Args:
            row: Mapping with catalog columns.

        Returns:
            New CatalogEntry.
        """
        hex_value = row.get('hex')
        if isinstance(hex_value, str):
            hex_value = hex_value.strip() or None

        specific = row.get('specific')
        if specific is not None:
            specific = _text(specific)

        return cls(
            brand=_text(row.get('brand')),
            product=_text(row.get('product')),
            shade_name=_text(row.get('shade_name') or row.get('name')),
            hex=hex_value,
            url=row.get('url'),
            image=row.get('imgSrc') or row.get('image'),
            specific=specific,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'brand': self.brand,
            'product': self.product,
            'shade_name': self.shade_name,
            'specific': self.specific,
            'hex': self.hex,
            'url': self.url,
            'image': self.image,
        }


@dataclass
class MatchResult:
    """A catalog entry scored against a skin sample.

    Attributes:
        entry: The scored CatalogEntry.
        color: The entry's OKLAB color.
        distance: Perceptual distance to the adjusted skin sample.
        undertone: Undertone inferred from the entry's shade name.
        score: distance multiplied by the undertone penalty (lower = better).
    """
    entry: CatalogEntry
    color: PerceptualColor
    distance: float
    undertone: Undertone
    score: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape returned to clients."""
        return {
            'brand': self.entry.brand,
            'product': self.entry.product,
            'shade_name': self.entry.shade_name,
            'hex': self.entry.hex,
            'undertone': self.undertone.value,
            'url': self.entry.url,
            'img': self.entry.image,
            'score': self.score,
        }


@dataclass
class MatchSet:
    """Result of ranking a catalog against one skin sample.

    Attributes:
        top_matches: Best matches, best first.
        perimeter_options: Up to three moderately darker shades for
            contour and bronzer routines.
        user_color: The skin sample's OKLAB color after lighting adjustment.
        user_undertone: Undertone of the unadjusted skin sample.
    """
    top_matches: List[MatchResult] = field(default_factory=list)
    perimeter_options: List[MatchResult] = field(default_factory=list)
    user_color: Optional[PerceptualColor] = None
    user_undertone: Optional[Undertone] = None

    @property
    def best(self) -> Optional[MatchResult]:
        return self.top_matches[0] if self.top_matches else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ok': True,
            'top_matches': [m.to_dict() for m in self.top_matches],
            'perimeter_options': [m.to_dict() for m in self.perimeter_options],
        }
