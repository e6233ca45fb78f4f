"""
Magic wand: erase pixels similar to a target color.

Erasing sets alpha to 0 and leaves the RGB channels untouched.
"""

from __future__ import annotations

import cv2
import numpy as np

from sprite_islands.pixel_buffer import Color, validate_rgba

# Largest possible RGB distance, sqrt(3 * 255^2), rounded
MAX_RGB_DISTANCE = 442


def match_mask(image: np.ndarray, target: Color, tolerance: float) -> np.ndarray:
    """
    Find the pixels matching `target` within `tolerance` percent.

    A transparent target (alpha 0) matches pixels whose alpha is below
    tolerance% of 255. Any other target never matches fully transparent
    pixels, and matches pixels whose RGB distance to it is within
    tolerance% of the maximum RGB distance.

    Args:
        image: RGBA pixel buffer
        target: Color to match
        tolerance: Percentage 0-100, clamped

    Returns:
        Boolean array of shape (height, width)
    """
    tolerance = max(0.0, min(100.0, float(tolerance)))
    alpha = image[:, :, 3]

    if target.a == 0:
        return alpha < (tolerance / 100) * 255

    diff = image[:, :, :3].astype(np.float64) - np.array(target.rgb, dtype=np.float64)
    dist = np.sqrt(np.sum(diff * diff, axis=2))
    return (alpha != 0) & (dist <= (tolerance / 100) * MAX_RGB_DISTANCE)


def flood_fill(image: np.ndarray, seed_x: int, seed_y: int, target: Color | None = None,
               tolerance: float = 20, contiguous: bool = True) -> int:
    """
    Erase pixels matching a target color, in place.

    In contiguous mode only pixels reachable from the seed through
    4-connected matching neighbors are erased; nothing happens if the seed
    itself doesn't match. In global mode every matching pixel is erased.

    Args:
        image: RGBA pixel buffer, modified in place
        seed_x: Seed column
        seed_y: Seed row
        target: Color to match. Defaults to the color under the seed.
        tolerance: Match tolerance in percent (0-100)
        contiguous: Erase only the region connected to the seed

    Returns:
        Number of pixels erased
    """
    validate_rgba(image)
    height, width = image.shape[:2]
    seed_inside = 0 <= seed_x < width and 0 <= seed_y < height

    if target is None:
        if not seed_inside:
            return 0
        target = Color.at(image, seed_x, seed_y)

    matches = match_mask(image, target, tolerance)

    if not contiguous:
        hits = matches & (image[:, :, 3] != 0)
        image[:, :, 3][hits] = 0
        return int(np.count_nonzero(hits))

    if not seed_inside or not matches[seed_y, seed_x]:
        return 0

    # The region is the 4-connected component of matching pixels holding the seed
    _num_labels, labels = cv2.connectedComponents(matches.astype(np.uint8), connectivity=4)
    region = labels == labels[seed_y, seed_x]
    image[:, :, 3][region] = 0
    return int(np.count_nonzero(region))
