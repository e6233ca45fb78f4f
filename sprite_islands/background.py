"""
Background detection and the foreground (sprite pixel) classifier.

The background is guessed from the one pixel wide image border: sprites are
assumed to be inset from the edges, so the border is either mostly
transparent or mostly one solid color.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum

import numpy as np

from sprite_islands.pixel_buffer import Color, validate_rgba

# Pixels with alpha below this are never part of a sprite
ALPHA_CUTOFF = 50

# Segmentation tolerates more color drift than the user facing threshold
THRESHOLD_SCALE = 2.5


class BackgroundKind(Enum):
    TRANSPARENT = "transparent"
    SOLID_COLOR = "solid_color"


@dataclass(frozen=True)
class BackgroundModel:
    """
    Inferred image background.

    Attributes:
        kind: Whether the background is transparency or a solid color
        color: The dominant border color for SOLID_COLOR backgrounds, None otherwise
    """
    kind: BackgroundKind
    color: Color | None = None

    @classmethod
    def transparent(cls) -> BackgroundModel:
        return cls(BackgroundKind.TRANSPARENT)

    @classmethod
    def solid(cls, color: Color) -> BackgroundModel:
        return cls(BackgroundKind.SOLID_COLOR, color)

    @property
    def is_transparent(self) -> bool:
        return self.kind is BackgroundKind.TRANSPARENT


def _border_coordinates(width: int, height: int) -> list[tuple[int, int]]:
    """
    List (x, y) of every border pixel once: top and bottom rows interleaved,
    then the left and right columns of the inner rows.
    """
    coords: list[tuple[int, int]] = []
    for x in range(width):
        coords.append((x, 0))
        coords.append((x, height - 1))
    for y in range(1, height - 1):
        coords.append((0, y))
        coords.append((width - 1, y))

    # Single row or column images would visit pixels twice
    return list(dict.fromkeys(coords))


def infer_background(image: np.ndarray) -> BackgroundModel:
    """
    Guess whether the image background is transparent or a solid color.

    Every border pixel is sampled. Pixels with alpha < 50 count as transparent,
    the rest vote for their exact RGB value. If more than half of the border is
    transparent the background is transparent, otherwise it is the most voted
    color (ties go to the color that reached the top count first).

    Args:
        image: RGBA pixel buffer

    Returns:
        The inferred BackgroundModel
    """
    validate_rgba(image)
    height, width = image.shape[:2]
    if width == 0 or height == 0:
        return BackgroundModel.transparent()

    coords = _border_coordinates(width, height)
    transparent_count = 0
    counts: Counter[tuple[int, int, int]] = Counter()
    dominant: tuple[int, int, int] | None = None

    for x, y in coords:
        r, g, b, a = (int(v) for v in image[y, x])
        if a < ALPHA_CUTOFF:
            transparent_count += 1
            continue
        key = (r, g, b)
        counts[key] += 1
        if dominant is None or counts[key] > counts[dominant]:
            dominant = key

    if dominant is None or transparent_count > 0.5 * len(coords):
        return BackgroundModel.transparent()

    return BackgroundModel.solid(Color(*dominant))


def is_sprite_pixel(pixel: Color | tuple[int, int, int, int] | np.ndarray,
                    background: BackgroundModel, threshold: float = 10) -> bool:
    """
    Classify a single RGBA pixel as sprite (foreground) or background.

    Args:
        pixel: RGBA value
        background: Inferred background of the image
        threshold: Color distance threshold, scaled by 2.5 for solid backgrounds

    Returns:
        True if the pixel belongs to a sprite
    """
    if isinstance(pixel, Color):
        r, g, b, a = pixel.r, pixel.g, pixel.b, pixel.a
    else:
        r, g, b, a = (int(v) for v in pixel)

    if a < ALPHA_CUTOFF:
        return False
    if background.is_transparent:
        return True

    bg = background.color
    dist = math.sqrt((r - bg.r) ** 2 + (g - bg.g) ** 2 + (b - bg.b) ** 2)
    return dist > threshold * THRESHOLD_SCALE


def sprite_mask(image: np.ndarray, background: BackgroundModel,
                threshold: float = 10) -> np.ndarray:
    """
    Vectorized `is_sprite_pixel` over a whole image.

    Returns:
        Boolean array of shape (height, width), True for sprite pixels
    """
    validate_rgba(image)
    opaque = image[:, :, 3] >= ALPHA_CUTOFF
    if background.is_transparent:
        return opaque

    diff = image[:, :, :3].astype(np.float64) - np.array(background.color.rgb, dtype=np.float64)
    dist = np.sqrt(np.sum(diff * diff, axis=2))
    return opaque & (dist > threshold * THRESHOLD_SCALE)
