# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Skin color sampling from photos.

Reduces a region of a photo (usually the cheek or jaw area picked by the
user) to three colors: the average skin tone, and the lightest and darkest
non-highlight, non-shadow tones. The light/dark pair feeds two-tone
foundation matching.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from PIL import Image

from makemeup.shade_matching.color_science import rgb_to_hex
from makemeup.shade_matching.errors import SamplingError

logger = logging.getLogger(__name__)

# Regions are downscaled to at most this many pixels per side
MAX_SAMPLE_SIZE = 64

# Fraction of pixels discarded at each end as highlights and shadows
HIGHLIGHT_SHADOW_TRIM = 0.05

# Fraction of the remaining pixels averaged for the lightest/darkest tones
EXTREME_FRACTION = 0.10


@dataclass
class SkinToneSample:
    """Colors sampled from a photo region.

    Attributes:
        average_hex: Mean color of the trimmed region.
        lightest_hex: Mean of the lightest decile after trimming.
        darkest_hex: Mean of the darkest decile after trimming.
        pixel_count: Number of pixels the average was taken over.
    """
    average_hex: str
    lightest_hex: str
    darkest_hex: str
    pixel_count: int

    def to_dict(self) -> Dict:
        return {
            'average_hex': self.average_hex,
            'lightest_hex': self.lightest_hex,
            'darkest_hex': self.darkest_hex,
            'pixel_count': self.pixel_count,
        }


def _luminance(pixel: Tuple[int, int, int]) -> float:
    return 0.299 * pixel[0] + 0.587 * pixel[1] + 0.114 * pixel[2]


def _mean_hex(pixels) -> str:
    count = len(pixels)
    r = sum(p[0] for p in pixels) / count
    g = sum(p[1] for p in pixels) / count
    b = sum(p[2] for p in pixels) / count
    return rgb_to_hex(r, g, b)


def _open(image) -> Image.Image:
    if isinstance(image, Image.Image):
        return image
    try:
        img = Image.open(image)
        img.load()
        return img
    except (OSError, ValueError) as e:
        raise SamplingError(f"Cannot read image: {e}") from e


def sample_skin_tone(
    image,
    box: Optional[Tuple[int, int, int, int]] = None,
) -> SkinToneSample:
    """Sample skin colors from a photo region.

    Args:
        image: File path, binary file object or PIL Image.
        box: Optional (left, upper, right, lower) crop region in pixels.

    Returns:
        SkinToneSample.

    Raises:
        SamplingError: If the image cannot be read or the region is empty.
    """
    img = _open(image).convert('RGB')

    if box is not None:
        left, upper, right, lower = box
        if right <= left or lower <= upper:
            raise SamplingError(f"Empty sample region: {box}")
        img = img.crop(box)

    if img.width == 0 or img.height == 0:
        raise SamplingError("Image has no pixels")

    if img.width > MAX_SAMPLE_SIZE or img.height > MAX_SAMPLE_SIZE:
        img = img.copy()
        img.thumbnail((MAX_SAMPLE_SIZE, MAX_SAMPLE_SIZE))

    data = img.tobytes()
    pixels = sorted(
        (tuple(data[i:i + 3]) for i in range(0, len(data), 3)),
        key=_luminance,
    )

    trim = int(len(pixels) * HIGHLIGHT_SHADOW_TRIM)
    if trim and len(pixels) > 2 * trim:
        pixels = pixels[trim:len(pixels) - trim]

    extreme = max(1, int(len(pixels) * EXTREME_FRACTION))

    sample = SkinToneSample(
        average_hex=_mean_hex(pixels),
        lightest_hex=_mean_hex(pixels[-extreme:]),
        darkest_hex=_mean_hex(pixels[:extreme]),
        pixel_count=len(pixels),
    )
    logger.debug(
        f"Sampled {sample.pixel_count} pixels: average={sample.average_hex} "
        f"lightest={sample.lightest_hex} darkest={sample.darkest_hex}"
    )
    return sample
